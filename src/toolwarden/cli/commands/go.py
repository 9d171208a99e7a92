"""``toolwarden go`` commands."""

from __future__ import annotations

import click

from toolwarden.cli.common import cli_error_handler, run_steps
from toolwarden.cli.context import get_cli_context
from toolwarden.orchestration import DependencyStep, RunMode
from toolwarden.orchestration.catalog import build_drift_checker, build_go


def _run(ctx: click.Context, mode: RunMode) -> None:
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        go = build_go(cli_ctx.config, cli_ctx.executor, build_drift_checker(cli_ctx.config))
        run_steps([DependencyStep.from_resource(go)], mode, quiet=cli_ctx.quiet)


@click.group()
def go() -> None:
    """Pinned Go toolchain."""


@go.command("verify")
@click.pass_context
def go_verify(ctx: click.Context) -> None:
    """Check that the installed Go matches the pinned version."""
    _run(ctx, RunMode.VERIFY_ONLY)


@go.command("deps")
@click.pass_context
def go_deps(ctx: click.Context) -> None:
    """Install the pinned Go release if it does not verify (uses sudo)."""
    _run(ctx, RunMode.FULL)
