from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from contact_quality.logging.logger import Log
from contact_quality.service.client_base import BaseAnalysisClient
from contact_quality.workflow.models import ApiLogEntry


class ApiLog:
    """Append-only record of calls made to the analysis service."""

    def __init__(self, entries: Iterable[ApiLogEntry] = ()) -> None:
        self._entries: list[ApiLogEntry] = list(entries)

    def record(
        self,
        method: str,
        endpoint: str,
        request: dict[str, Any] | None,
        response: Any,
    ) -> ApiLogEntry:
        entry = ApiLogEntry(
            id=len(self._entries) + 1,
            timestamp=datetime.now(UTC).isoformat(),
            method=method,
            endpoint=endpoint,
            request=request,
            response=response,
        )
        self._entries.append(entry)
        Log.debug(f"{method} {endpoint} -> {response!r}")
        return entry

    @property
    def entries(self) -> tuple[ApiLogEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class AuditedClient(BaseAnalysisClient):
    """Wraps a client and records each completed call in an ApiLog."""

    def __init__(self, client: BaseAnalysisClient, api_log: ApiLog) -> None:
        self._client = client
        self._api_log = api_log

    @property
    def api_log(self) -> ApiLog:
        return self._api_log

    def input_data(self, *, object_name: str, data_type: str, input_data: list[str]) -> str:
        payload = {
            "created_object_name": object_name,
            "data_type": data_type,
            "input_data": input_data,
        }
        response = self._client.input_data(
            object_name=object_name, data_type=data_type, input_data=input_data
        )
        self._api_log.record("POST", "/input_data", payload, response)
        return response

    def apply_prompt(
        self,
        *,
        created_object_names: list[str],
        prompt_string: str,
        inputs: list[dict[str, str]],
    ) -> str:
        payload = {
            "created_object_names": created_object_names,
            "prompt_string": prompt_string,
            "inputs": inputs,
        }
        response = self._client.apply_prompt(
            created_object_names=created_object_names,
            prompt_string=prompt_string,
            inputs=inputs,
        )
        self._api_log.record("POST", "/apply_prompt", payload, response)
        return response

    def return_data(self, object_name: str) -> dict[str, Any]:
        response = self._client.return_data(object_name)
        self._api_log.record("GET", f"/return_data/{object_name}", None, response)
        return response

    def delete_object(self, object_name: str) -> str:
        response = self._client.delete_object(object_name)
        self._api_log.record("DELETE", f"/objects/{object_name}", None, response)
        return response
