"""CLI context, exit codes and per-invocation dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

import click

from toolwarden.config import ToolwardenConfig
from toolwarden.runners import CommandExecutor, CommandRunner

__all__ = ["ExitCode", "CLIContext", "get_cli_context"]


class ExitCode(IntEnum):
    """Exit codes for the toolwarden CLI.

    - 0 for success
    - 1 for any failed verification, installation or render
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Type-safe CLI context containing global options and configuration.

    Attributes:
        config: Loaded configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
        executor: Process executor shared by every resource in this
            invocation.
    """

    config: ToolwardenConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False
    executor: CommandExecutor = field(default_factory=CommandRunner)


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Fetch the CLIContext stored by the root group."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx
