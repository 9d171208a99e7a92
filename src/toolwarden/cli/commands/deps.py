"""``toolwarden deps`` commands.

Run the default dependency catalogue (Go toolchain, Mermaid CLI, Git)
through the orchestrator.
"""

from __future__ import annotations

import click

from toolwarden.cli.common import cli_error_handler, run_steps
from toolwarden.cli.context import get_cli_context
from toolwarden.orchestration import RunMode, dependency_steps


def _run(ctx: click.Context, mode: RunMode) -> None:
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        steps = dependency_steps(cli_ctx.config, cli_ctx.executor)
        run_steps(steps, mode, quiet=cli_ctx.quiet)


@click.group()
def deps() -> None:
    """Verify and install the toolchain dependencies."""


@deps.command("all")
@click.pass_context
def deps_all(ctx: click.Context) -> None:
    """Ensure every dependency, then verify them all again.

    Installs the pinned Go toolchain, the Mermaid CLI and its system
    libraries when they are missing or at the wrong version. Some
    installers use sudo.
    """
    _run(ctx, RunMode.FULL)


@deps.command("verify")
@click.pass_context
def deps_verify(ctx: click.Context) -> None:
    """Verify every dependency without installing anything."""
    _run(ctx, RunMode.VERIFY_ONLY)


@deps.command("minimal")
@click.pass_context
def deps_minimal(ctx: click.Context) -> None:
    """Verify the dependencies that need no elevated rights (CI mode)."""
    _run(ctx, RunMode.MINIMAL)
