"""Pure state transitions for the upload -> processing -> results wizard.

Every function takes a ``WorkflowState`` and returns a new one; inputs are
never mutated.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from contact_quality.workflow.models import (
    ApiLogEntry,
    QualityIssue,
    SortConfig,
    UploadedFile,
    WorkflowState,
    WorkflowStep,
    processing_error_issue,
)
from contact_quality.workflow.pipeline import PipelineContext

SORTABLE_COLUMNS = ("row_number", "field", "issue_type")

ASC = "asc"
DESC = "desc"


def initial_state() -> WorkflowState:
    return WorkflowState()


def reset() -> WorkflowState:
    return initial_state()


def select_files(state: WorkflowState, files: Iterable[UploadedFile]) -> WorkflowState:
    return state.evolve(files=tuple(files))


def start_processing(state: WorkflowState) -> WorkflowState:
    return state.evolve(
        step=WorkflowStep.PROCESSING,
        processing=True,
        issues=(),
        api_logs=(),
        raw_results={},
    )


def complete_run(
    state: WorkflowState,
    context: PipelineContext,
    api_logs: Sequence[ApiLogEntry] = (),
) -> WorkflowState:
    issues = context.parse_result.to_issues() if context.parse_result is not None else []
    return state.evolve(
        step=WorkflowStep.RESULTS,
        processing=False,
        issues=tuple(issues),
        corrected_data=context.corrected_text,
        download_ready=True,
        api_logs=tuple(api_logs),
        raw_results=dict(context.raw_results),
    )


def fail_run(
    state: WorkflowState,
    context: PipelineContext,
    api_logs: Sequence[ApiLogEntry] = (),
) -> WorkflowState:
    return state.evolve(
        step=WorkflowStep.RESULTS,
        processing=False,
        issues=(processing_error_issue(),),
        download_ready=False,
        api_logs=tuple(api_logs),
        raw_results=dict(context.raw_results),
    )


def toggle_sort(state: WorkflowState, key: str) -> WorkflowState:
    direction = ASC
    if state.sort.key == key and state.sort.direction == ASC:
        direction = DESC
    return state.evolve(sort=SortConfig(key=key, direction=direction))


def toggle_raw_results(state: WorkflowState) -> WorkflowState:
    return state.evolve(show_raw_results=not state.show_raw_results)


def _sort_key(value: Any) -> tuple[int, Any]:
    # None < numbers < strings; Python refuses to compare across those.
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    return (2, str(value))


def sorted_issues(state: WorkflowState) -> list[QualityIssue]:
    """Issues in the order selected by ``state.sort``, as a new list."""
    issues = list(state.issues)
    key = state.sort.key
    if key is None:
        return issues
    return sorted(
        issues,
        key=lambda issue: _sort_key(issue.to_dict().get(key)),
        reverse=state.sort.direction == DESC,
    )


def sort_indicator(state: WorkflowState, column: str) -> str:
    if state.sort.key != column:
        return "↕"
    return "↑" if state.sort.direction == ASC else "↓"
