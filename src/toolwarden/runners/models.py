"""Data models for subprocess runners."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CommandResult"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of executing a single command.

    Attributes:
        returncode: Exit code from the command (0 = success).
        stdout: Standard output captured from the command.
        stderr: Standard error captured from the command.
        duration_ms: Execution time in milliseconds.
    """

    returncode: int
    stdout: str
    stderr: str
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        """True if command exited with returncode 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr for convenience."""
        if self.stderr:
            return f"{self.stdout}\n{self.stderr}" if self.stdout else self.stderr
        return self.stdout
