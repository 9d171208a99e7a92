"""Command runner for blocking subprocess execution.

This module provides the CommandRunner class for executing external commands
with working-directory validation, environment control and captured output.
Captured output is also logged at debug level, one event per line.
Commands run to completion: no timeout is imposed here, the external tool's
own behaviour decides how long a call may take.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

from toolwarden.exceptions import WorkingDirectoryError
from toolwarden.logging import get_logger
from toolwarden.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["CommandRunner"]

logger = get_logger(__name__)


class CommandRunner:
    """Execute commands with environment control and captured output.

    Attributes:
        cwd: Working directory for command execution.
        env: Additional environment variables to merge with parent env.

    Example:
        ```python
        runner = CommandRunner()
        result = runner.run(["go", "version"])
        if result.success:
            print(result.stdout)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. If None, uses current directory.
            env: Additional environment variables to merge with os.environ.
        """
        self._cwd = cwd
        self._extra_env = env or {}

    @property
    def cwd(self) -> Path | None:
        """Working directory for command execution."""
        return self._cwd

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: dict[str, str] | None = None) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    def _log_output(self, command: Sequence[str], stream: str, text: str) -> None:
        """Log captured output line by line so it carries the bound step context."""
        for line in text.splitlines():
            if line.strip():
                logger.debug("command_output", program=command[0], stream=stream, line=line)

    def which(self, executable: str) -> str | None:
        """Resolve an executable on PATH.

        Args:
            executable: Command name (e.g., "docker").

        Returns:
            Absolute path to the executable, or None if not found.
        """
        return shutil.which(executable, path=self._build_env().get("PATH"))

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Execute a command and return the result.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            env: Additional environment variables for this command.

        Returns:
            CommandResult with returncode, stdout, stderr and duration_ms.
            A missing executable yields returncode 127, a non-executable
            one returncode 126.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)
        effective_env = self._build_env(env)

        start_time = time.monotonic()
        logger.debug("command_started", command=list(command))

        try:
            completed = subprocess.run(
                list(command),
                cwd=effective_cwd,
                env=effective_env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
            returncode = completed.returncode
            stdout_str = completed.stdout or ""
            stderr_str = completed.stderr or ""
        except FileNotFoundError:
            returncode = 127
            stdout_str = ""
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = 126
            stdout_str = ""
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)
        self._log_output(command, "stdout", stdout_str)
        self._log_output(command, "stderr", stderr_str)
        logger.debug(
            "command_finished",
            command=list(command),
            returncode=returncode,
            duration_ms=duration_ms,
        )

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
        )
