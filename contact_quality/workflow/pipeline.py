from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from contact_quality.workflow.models import FileText, IssuesParseResult, UploadedFile


@dataclass(slots=True)
class PipelineContext:
    files: list[UploadedFile]
    file_texts: list[FileText] = field(default_factory=list)
    raw_results: dict[str, Any] = field(default_factory=dict)
    issues_text: str | None = None
    corrected_text: str = ""
    parse_result: IssuesParseResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    name: str = ""

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class Pipeline:
    """Runs steps in order; the first exception stops the run."""

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    def run(self, context: PipelineContext) -> PipelineContext:
        for step in self._steps:
            context = step.run(context)
        return context
