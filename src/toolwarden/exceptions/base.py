from __future__ import annotations


class ToolwardenError(Exception):
    """Base exception class for all Toolwarden-specific errors.

    This is the root of the Toolwarden exception hierarchy. Catching it at the
    CLI boundary handles every dependency, credential and orchestration
    failure while letting system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            orchestrator.run(RunMode.FULL).raise_for_failure()
        except ToolwardenError as e:
            logger.error("run_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the ToolwardenError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
