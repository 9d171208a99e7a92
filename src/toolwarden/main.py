"""CLI entry point for toolwarden.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from toolwarden import __version__
from toolwarden.cli.commands.deps import deps
from toolwarden.cli.commands.diagrams import diagrams
from toolwarden.cli.commands.docker import docker
from toolwarden.cli.commands.git import git
from toolwarden.cli.commands.go import go
from toolwarden.cli.commands.mermaid import mermaid
from toolwarden.cli.context import CLIContext, ExitCode
from toolwarden.cli.output import format_error
from toolwarden.config import load_config
from toolwarden.exceptions import ConfigError
from toolwarden.logging import configure_logging
from toolwarden.runners import CommandRunner

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="toolwarden")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./toolwarden.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """toolwarden - verify and self-heal build toolchain dependencies."""
    # .env never overrides variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    ctx.ensure_object(dict)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details or None), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
        executor=ctx.obj.get("executor") or CommandRunner(),
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(deps)
cli.add_command(go)
cli.add_command(mermaid)
cli.add_command(docker)
cli.add_command(git)
cli.add_command(diagrams)

if __name__ == "__main__":
    cli()
