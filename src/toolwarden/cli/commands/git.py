"""``toolwarden git`` commands."""

from __future__ import annotations

from email.utils import format_datetime

import click

from toolwarden.cli.common import cli_error_handler, run_steps
from toolwarden.cli.console import console
from toolwarden.cli.context import get_cli_context
from toolwarden.cli.output import format_success, format_table, format_warning
from toolwarden.orchestration import DependencyStep, RunMode
from toolwarden.orchestration.catalog import build_git


@click.group()
def git() -> None:
    """Git availability, identity and repository checks."""


@git.command("verify")
@click.pass_context
def git_verify(ctx: click.Context) -> None:
    """Check that git is on PATH."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        step = DependencyStep.from_resource(build_git(cli_ctx.executor))
        run_steps([step], RunMode.VERIFY_ONLY, quiet=cli_ctx.quiet)


@git.command("config")
@click.pass_context
def git_config(ctx: click.Context) -> None:
    """Report whether user.name and user.email are set globally."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        identity = build_git(cli_ctx.executor).check_config()
        if identity.configured:
            console.print(
                format_success(f"Git user configured as {identity}"), markup=False
            )
        else:
            console.print(format_warning("Git user.name or user.email is not configured."))
            console.print("To set globally, run:")
            console.print('  git config --global user.name "Your Name"', markup=False)
            console.print('  git config --global user.email "you@example.com"', markup=False)


@git.command("deps")
@click.pass_context
def git_deps(ctx: click.Context) -> None:
    """Verify git and report identity advice."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        step = DependencyStep.from_resource(build_git(cli_ctx.executor))
        run_steps([step], RunMode.FULL, quiet=cli_ctx.quiet)


@git.command("remote")
@click.pass_context
def git_remote(ctx: click.Context) -> None:
    """Check that the origin remote is reachable."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        size = build_git(cli_ctx.executor).check_remote()
        console.print(format_success(f"Git remote accessible ({size} bytes returned)"))


@git.command("info")
@click.pass_context
def git_info(ctx: click.Context) -> None:
    """Show branch, remote and last commit of the current repository."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        info = build_git(cli_ctx.executor).info()
        rows = [
            ["Branch", info.branch],
            ["Remote", info.remote],
            ["Last Commit", info.last_commit],
            ["Checked", format_datetime(info.checked_at)],
        ]
        console.print(format_table(["Key", "Value"], rows), markup=False, highlight=False)
