class WorkflowError(Exception):
    """Base exception for workflow errors."""


class StageOrderError(WorkflowError):
    """Raised when a pipeline stage runs before the stage it depends on."""
