import dataclasses
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any

ISSUE_KEYS = ("row_number", "field", "issue_type", "current_value", "explanation")

PROCESSING_ERROR_EXPLANATION = (
    "An error occurred while processing your files. Please try again."
)
UNPARSED_ROW_KEYS = frozenset(ISSUE_KEYS) - {"issue_type"}


class WorkflowStep(str, Enum):
    UPLOAD = "upload"
    PROCESSING = "processing"
    RESULTS = "results"


@dataclass(frozen=True)
class UploadedFile:
    """A file selected in the browser, held in memory for one run."""

    name: str
    content: bytes
    media_type: str = ""

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "media_type": self.media_type, "size": len(self.content)}


@dataclass(frozen=True)
class FileText:
    """Text read from an uploaded file, ready for ingestion."""

    name: str
    content: str

    def as_ingest_block(self) -> str:
        return f"File: {self.name}\n{self.content}"


@dataclass(frozen=True)
class QualityIssue:
    """One issue reported by the analysis service.

    Values are kept exactly as the service returned them. ``provided`` names
    the known keys the record actually carried, so ``to_dict`` gives back
    only those; keys other than the five known ones live in ``extra``.
    Attribute access on an absent key reads ``None``.
    """

    row_number: str | int | None = None
    field: str | None = None
    issue_type: str | None = None
    current_value: str | None = None
    explanation: str | None = None
    # "field" is shadowed by the attribute above
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)
    provided: frozenset[str] = frozenset(ISSUE_KEYS)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "QualityIssue":
        known = {key: data[key] for key in ISSUE_KEYS if key in data}
        extra = {key: value for key, value in data.items() if key not in ISSUE_KEYS}
        return cls(**known, extra=extra, provided=frozenset(known))

    def to_dict(self) -> dict[str, Any]:
        data = {key: getattr(self, key) for key in ISSUE_KEYS if key in self.provided}
        data.update(self.extra)
        return data


def processing_error_issue() -> QualityIssue:
    return QualityIssue(
        row_number="Error",
        field="System",
        issue_type="Processing Error",
        current_value="",
        explanation=PROCESSING_ERROR_EXPLANATION,
    )


@dataclass(frozen=True)
class ParsedIssues:
    """Issues output that decoded as JSON."""

    issues: list[QualityIssue]

    def to_issues(self) -> list[QualityIssue]:
        return list(self.issues)


@dataclass(frozen=True)
class UnparsedIssues:
    """Issues output that was not JSON; shown to the user as-is.

    The single fallback row has no issue type.
    """

    raw_text: str

    def to_issues(self) -> list[QualityIssue]:
        return [
            QualityIssue(
                row_number="Multiple",
                field="General",
                current_value="",
                explanation=self.raw_text,
                provided=UNPARSED_ROW_KEYS,
            )
        ]


IssuesParseResult = ParsedIssues | UnparsedIssues


@dataclass(frozen=True)
class ApiLogEntry:
    """One outbound call to the analysis service."""

    id: int
    timestamp: str
    method: str
    endpoint: str
    request: dict[str, Any] | None
    response: Any

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ApiLogEntry":
        return cls(**data)


@dataclass(frozen=True)
class SortConfig:
    key: str | None = None
    direction: str = "asc"


@dataclass(frozen=True)
class CsvDownload:
    filename: str
    media_type: str
    content: bytes


@dataclass(frozen=True)
class PurgeReport:
    success: bool
    message: str
    deleted: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorkflowState:
    """Everything the UI renders, as one serializable value."""

    step: WorkflowStep = WorkflowStep.UPLOAD
    files: tuple[UploadedFile, ...] = ()
    processing: bool = False
    issues: tuple[QualityIssue, ...] = ()
    corrected_data: str = ""
    download_ready: bool = False
    api_logs: tuple[ApiLogEntry, ...] = ()
    raw_results: dict[str, Any] = field(default_factory=dict)
    show_raw_results: bool = False
    sort: SortConfig = field(default_factory=SortConfig)

    def evolve(self, **changes: Any) -> "WorkflowState":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step.value,
            "files": [f.to_dict() for f in self.files],
            "processing": self.processing,
            "issues": [issue.to_dict() for issue in self.issues],
            "corrected_data": self.corrected_data,
            "download_ready": self.download_ready,
            "api_logs": [entry.to_dict() for entry in self.api_logs],
            "raw_results": dict(self.raw_results),
            "show_raw_results": self.show_raw_results,
            "sort": {"key": self.sort.key, "direction": self.sort.direction},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkflowState":
        """Rebuild a state from ``to_dict`` output.

        File contents are not serialized, so restored files are empty.
        """
        return cls(
            step=WorkflowStep(data["step"]),
            files=tuple(
                UploadedFile(name=f["name"], content=b"", media_type=f.get("media_type", ""))
                for f in data.get("files", [])
            ),
            processing=data.get("processing", False),
            issues=tuple(QualityIssue.from_mapping(i) for i in data.get("issues", [])),
            corrected_data=data.get("corrected_data", ""),
            download_ready=data.get("download_ready", False),
            api_logs=tuple(ApiLogEntry.from_dict(e) for e in data.get("api_logs", [])),
            raw_results=dict(data.get("raw_results", {})),
            show_raw_results=data.get("show_raw_results", False),
            sort=SortConfig(**data.get("sort", {})),
        )
