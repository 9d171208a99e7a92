"""``toolwarden mermaid`` commands."""

from __future__ import annotations

import click

from toolwarden.cli.commands.diagrams import clean, render_all
from toolwarden.cli.common import cli_error_handler, run_steps
from toolwarden.cli.console import console
from toolwarden.cli.context import get_cli_context
from toolwarden.cli.output import format_success
from toolwarden.orchestration import DependencyStep, RunMode, dependency_steps
from toolwarden.orchestration.catalog import (
    build_drift_checker,
    build_mermaid,
    build_system_libraries,
)
from toolwarden.resources import HealOutcome


def _run(ctx: click.Context, mode: RunMode) -> None:
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        mermaid = build_mermaid(
            cli_ctx.config, cli_ctx.executor, build_drift_checker(cli_ctx.config)
        )
        run_steps([DependencyStep.from_resource(mermaid)], mode, quiet=cli_ctx.quiet)


@click.group()
def mermaid() -> None:
    """Mermaid CLI (mmdc) and its system libraries."""


@mermaid.command("verify")
@click.pass_context
def mermaid_verify(ctx: click.Context) -> None:
    """Check that mmdc reports the pinned version."""
    _run(ctx, RunMode.VERIFY_ONLY)


@mermaid.command("deps")
@click.pass_context
def mermaid_deps(ctx: click.Context) -> None:
    """Install system libraries and the pinned Mermaid CLI as needed."""
    _run(ctx, RunMode.FULL)


@mermaid.command("version")
@click.pass_context
def mermaid_version(ctx: click.Context) -> None:
    """Print the installed Mermaid CLI version."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        reported = build_mermaid(cli_ctx.config, cli_ctx.executor).version()
        console.print(f"Mermaid CLI version: {reported}", markup=False)


@mermaid.command("syslibs")
@click.pass_context
def mermaid_syslibs(ctx: click.Context) -> None:
    """Install any missing headless-browser system libraries (uses sudo)."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        libraries = build_system_libraries(cli_ctx.config, cli_ctx.executor)
        outcome = libraries.ensure()
        if cli_ctx.quiet:
            return
        if outcome is HealOutcome.ALREADY_SATISFIED:
            console.print(format_success("All required system libraries are installed."))
        else:
            console.print(format_success("Missing system libraries installed."))


@mermaid.command("all")
@click.pass_context
def mermaid_all(ctx: click.Context) -> None:
    """Full pipeline: deps all → diagrams clean → diagrams render-all."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        run_steps(
            dependency_steps(cli_ctx.config, cli_ctx.executor),
            RunMode.FULL,
            quiet=cli_ctx.quiet,
        )
        clean(cli_ctx)
        render_all(cli_ctx)
