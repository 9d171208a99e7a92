"""CLI utilities for toolwarden.

This module provides the CLI context, exit codes, consoles and output
formatting shared by the command modules.
"""

from __future__ import annotations

from toolwarden.cli.context import CLIContext, ExitCode, get_cli_context

__all__ = [
    "CLIContext",
    "ExitCode",
    "get_cli_context",
]
