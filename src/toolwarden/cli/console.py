"""Shared Rich consoles for toolwarden output.

Step progress goes to stdout; errors and advisories go to stderr. Rich
strips styling automatically when output is piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console", "err_console"]

console = Console()
err_console = Console(stderr=True)
