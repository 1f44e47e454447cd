from abc import ABC, abstractmethod
from typing import Any

CONTACT_DATA = "contact_data"
QUALITY_ISSUES = "quality_issues"
CORRECTED_DATA = "corrected_data"

REMOTE_OBJECTS = (CONTACT_DATA, QUALITY_ISSUES, CORRECTED_DATA)


class BaseAnalysisClient(ABC):
    """Contract for clients of the hosted analysis service.

    The service stores named objects server side; each call either creates
    one (``input_data``, ``apply_prompt``), reads one back (``return_data``)
    or removes one (``delete_object``).
    """

    @abstractmethod
    def input_data(self, *, object_name: str, data_type: str, input_data: list[str]) -> str:
        """Ingest raw strings as ``object_name``. Returns the response body."""

    @abstractmethod
    def apply_prompt(
        self,
        *,
        created_object_names: list[str],
        prompt_string: str,
        inputs: list[dict[str, str]],
    ) -> str:
        """Run a prompt over input objects, materializing new objects."""

    @abstractmethod
    def return_data(self, object_name: str) -> dict[str, Any]:
        """Fetch a named object. The body carries its text in ``text_value``."""

    @abstractmethod
    def delete_object(self, object_name: str) -> str:
        """Delete a named object whether or not it exists."""
