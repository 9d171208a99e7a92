from __future__ import annotations

from toolwarden.exceptions.base import ToolwardenError


class OrchestrationError(ToolwardenError):
    """Base exception for dependency orchestration errors."""

    pass


class DuplicateStepNameError(OrchestrationError):
    """Raised when two dependency steps share the same name.

    Attributes:
        message: Human-readable error message.
        step_name: The duplicate step name.
    """

    def __init__(self, step_name: str) -> None:
        """Initialize the DuplicateStepNameError.

        Args:
            step_name: The duplicate step name.
        """
        self.step_name = step_name
        super().__init__(
            f"Duplicate step name: '{step_name}'. "
            f"Step names must be unique within a run.",
        )


class IncompleteRunError(OrchestrationError):
    """Raised when a run's event stream ends without a RunCompleted event."""

    def __init__(self) -> None:
        super().__init__("Dependency run ended without reporting a result")


class StepFailedError(OrchestrationError):
    """Raised when a named dependency step fails.

    Attributes:
        message: Human-readable error message prefixed with the step name.
        step_name: Name of the failing step.
        cause: The exception raised by the step.
    """

    def __init__(self, step_name: str, cause: BaseException) -> None:
        """Initialize the StepFailedError.

        Args:
            step_name: Name of the failing step.
            cause: The exception raised by the step.
        """
        self.step_name = step_name
        self.cause = cause
        detail = getattr(cause, "message", None) or str(cause)
        super().__init__(f"{step_name} failed: {detail}")
