"""Subprocess execution for dependency checks and installers."""

from __future__ import annotations

from toolwarden.runners.command import CommandRunner
from toolwarden.runners.models import CommandResult
from toolwarden.runners.protocols import CommandExecutor

__all__ = [
    "CommandExecutor",
    "CommandResult",
    "CommandRunner",
]
