"""Offline analysis client.

Keeps named objects in a dict and answers prompts with fixed outputs, so the
UI can be exercised without credentials for the hosted service.
"""

import json
from typing import Any, ClassVar

from contact_quality.service.client_base import (
    CORRECTED_DATA,
    QUALITY_ISSUES,
    BaseAnalysisClient,
)


class ExampleClientAdapter(BaseAnalysisClient):
    """In-memory stand-in for the hosted service. No network calls."""

    DEFAULT_OUTPUTS: ClassVar[dict[str, str]] = {
        QUALITY_ISSUES: json.dumps(
            [
                {
                    "row_number": 2,
                    "field": "name",
                    "issue_type": "Name format inconsistency",
                    "current_value": "Smith, John",
                    "explanation": "Name is in 'Last, First' order; expected 'First Last'.",
                },
                {
                    "row_number": 3,
                    "field": "title",
                    "issue_type": "Title abbreviation",
                    "current_value": "VP",
                    "explanation": "Abbreviated title; expected 'Vice President'.",
                },
            ]
        ),
        CORRECTED_DATA: (
            "Name,Email,Office,Title\n"
            'John Smith,john.smith@example.com,"New York, NY",Vice President\n'
        ),
    }

    def __init__(self, outputs: dict[str, str] | None = None) -> None:
        self._outputs = dict(self.DEFAULT_OUTPUTS if outputs is None else outputs)
        self._objects: dict[str, str] = {}

    def input_data(self, *, object_name: str, data_type: str, input_data: list[str]) -> str:
        _ = data_type
        self._objects[object_name] = "\n".join(input_data)
        return json.dumps({"status": "ok", "object_name": object_name})

    def apply_prompt(
        self,
        *,
        created_object_names: list[str],
        prompt_string: str,
        inputs: list[dict[str, str]],
    ) -> str:
        _ = prompt_string
        missing = [
            item["input_object_name"]
            for item in inputs
            if item["input_object_name"] not in self._objects
        ]
        if missing:
            return json.dumps({"status": "error", "missing_objects": missing})
        for name in created_object_names:
            self._objects[name] = self._outputs.get(name, "")
        return json.dumps({"status": "ok", "created": created_object_names})

    def return_data(self, object_name: str) -> dict[str, Any]:
        return {"object_name": object_name, "text_value": self._objects.get(object_name, "")}

    def delete_object(self, object_name: str) -> str:
        existed = self._objects.pop(object_name, None) is not None
        return json.dumps({"status": "ok", "deleted": existed})
