"""``toolwarden docker`` commands."""

from __future__ import annotations

import click

from toolwarden.cli.common import cli_error_handler, run_steps
from toolwarden.cli.console import console
from toolwarden.cli.context import get_cli_context
from toolwarden.cli.output import format_success
from toolwarden.credentials import ProvisionOutcome
from toolwarden.orchestration import RunMode, docker_steps
from toolwarden.orchestration.catalog import build_app_key

_SECRET_MESSAGES = {
    ProvisionOutcome.ALREADY_MOUNTED: "GitHub App key available via Docker secret.",
    ProvisionOutcome.SKIPPED_NOT_MANAGER: (
        "Running in non-Swarm mode; using the local key directly."
    ),
    ProvisionOutcome.CREATED: "Docker secret created.",
    ProvisionOutcome.ALREADY_EXISTS: "Docker secret already exists, skipped creation.",
}


def _run(ctx: click.Context, mode: RunMode) -> None:
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        steps = docker_steps(cli_ctx.config, cli_ctx.executor)
        run_steps(steps, mode, quiet=cli_ctx.quiet)


@click.group()
def docker() -> None:
    """Docker engine, Buildx and the GitHub App key secret."""


@docker.command("verify")
@click.pass_context
def docker_verify(ctx: click.Context) -> None:
    """Read-only check of the engine, Buildx and the GitHub App key."""
    _run(ctx, RunMode.VERIFY_ONLY)


@docker.command("deps")
@click.pass_context
def docker_deps(ctx: click.Context) -> None:
    """Install the engine and Buildx if needed and provision the key secret."""
    _run(ctx, RunMode.FULL)


@docker.command("secrets")
@click.pass_context
def docker_secrets(ctx: click.Context) -> None:
    """Resolve the GitHub App key and publish it as a Swarm secret."""
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        outcome = build_app_key(cli_ctx.config, cli_ctx.executor).ensure()
        if not cli_ctx.quiet:
            console.print(format_success(_SECRET_MESSAGES[outcome]))
