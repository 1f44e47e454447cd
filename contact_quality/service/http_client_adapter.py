from typing import Any

import httpx

from contact_quality.service.client_base import BaseAnalysisClient
from contact_quality.service.exceptions import AnalysisServiceError, AnalysisServiceNetworkError


class HttpAnalysisClient(BaseAnalysisClient):
    """Analysis service client built on httpx.

    Response status codes are not inspected: whatever body the service sends
    back is returned to the caller.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str,
        timeout_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    def input_data(self, *, object_name: str, data_type: str, input_data: list[str]) -> str:
        payload = {
            "created_object_name": object_name,
            "data_type": data_type,
            "input_data": input_data,
        }
        return self._send("POST", "/input_data", json=payload).text

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
        return self._send("POST", "/apply_prompt", json=payload).text

    def return_data(self, object_name: str) -> dict[str, Any]:
        response = self._send("GET", f"/return_data/{object_name}")
        try:
            body = response.json()
        except ValueError as exc:
            raise AnalysisServiceError(
                f"return_data/{object_name} did not return JSON: {exc}"
            ) from exc
        if not isinstance(body, dict):
            raise AnalysisServiceError(f"return_data/{object_name} must return a JSON object")
        return body

    def delete_object(self, object_name: str) -> str:
        return self._send("DELETE", f"/objects/{object_name}").text

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise AnalysisServiceNetworkError(
                f"Analysis service network error on {method} {url}: {exc}"
            ) from exc
