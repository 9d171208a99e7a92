"""``toolwarden diagrams`` commands."""

from __future__ import annotations

import click

from toolwarden.cli.common import cli_error_handler
from toolwarden.cli.console import console
from toolwarden.cli.context import CLIContext, get_cli_context
from toolwarden.cli.output import format_success
from toolwarden.diagrams import DiagramRenderer
from toolwarden.orchestration.catalog import build_drift_checker, build_mermaid


def build_renderer(cli_ctx: CLIContext) -> DiagramRenderer:
    config = cli_ctx.config
    mermaid = build_mermaid(config, cli_ctx.executor, build_drift_checker(config))
    return DiagramRenderer(config.diagrams, cli_ctx.executor, mermaid)


def render_all(cli_ctx: CLIContext) -> None:
    rendered = build_renderer(cli_ctx).render_all()
    if not cli_ctx.quiet:
        for path in rendered:
            console.print(f"  [green]✓[/green] {path}")
        console.print(format_success(f"Rendered {len(rendered)} diagram(s)."))


def clean(cli_ctx: CLIContext) -> None:
    build_renderer(cli_ctx).clean()
    if not cli_ctx.quiet:
        console.print(format_success("Removed generated diagrams."))


@click.group()
def diagrams() -> None:
    """Extract and render Mermaid diagrams from Markdown sources."""


@diagrams.command("render-all")
@click.pass_context
def diagrams_render_all(ctx: click.Context) -> None:
    """Render every Markdown document in the source directory."""
    with cli_error_handler():
        render_all(get_cli_context(ctx))


@diagrams.command("render-one")
@click.argument("name")
@click.pass_context
def diagrams_render_one(ctx: click.Context, name: str) -> None:
    """Render a single diagram by NAME (file name without ``.md``).

    Examples:

    \b
        toolwarden diagrams render-one architecture
    """
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler():
        output = build_renderer(cli_ctx).render_one(name)
        if not cli_ctx.quiet:
            console.print(format_success(f"Generated {output}"))


@diagrams.command("clean")
@click.pass_context
def diagrams_clean(ctx: click.Context) -> None:
    """Remove all generated diagram outputs."""
    with cli_error_handler():
        clean(get_cli_context(ctx))
