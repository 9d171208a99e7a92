"""Protocol definitions for process execution.

Every resource shells out through a ``CommandExecutor`` rather than calling
``subprocess`` directly, so tests can substitute a scripted executor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from toolwarden.runners.models import CommandResult

__all__ = ["CommandExecutor"]


@runtime_checkable
class CommandExecutor(Protocol):
    """Protocol for objects that run external commands.

    Example:
        A fake executor used in tests::

            class ScriptedExecutor:
                def run(self, command, *, cwd=None, env=None) -> CommandResult:
                    return CommandResult(returncode=0, stdout="ok", stderr="")

                def which(self, executable: str) -> str | None:
                    return f"/usr/bin/{executable}"
    """

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command to completion and capture its output.

        Note:
            A missing executable is reported as returncode 127, not raised.
        """
        ...

    def which(self, executable: str) -> str | None:
        """Return the resolved path of an executable on PATH, or None."""
        ...
