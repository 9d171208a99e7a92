from __future__ import annotations

import contextlib
from collections.abc import Generator, Sequence

import click

from toolwarden.cli.console import console, err_console
from toolwarden.cli.context import ExitCode
from toolwarden.cli.output import format_error, format_success
from toolwarden.exceptions import (
    IncompleteRunError,
    NotInstalledError,
    ProvisionError,
    RenderError,
    StepFailedError,
    ToolwardenError,
)
from toolwarden.logging import get_logger
from toolwarden.orchestration import (
    DependencyStep,
    OrchestrationResult,
    Orchestrator,
    RunCompleted,
    RunMode,
    RunStarted,
    StepFailed,
    StepPassed,
    StepPhase,
    StepStarted,
)

__all__ = ["cli_error_handler", "describe_error", "run_steps"]

_MODE_TITLES = {
    RunMode.FULL: "Ensuring",
    RunMode.VERIFY_ONLY: "Verifying",
    RunMode.MINIMAL: "Minimal check (CI mode):",
}


def describe_error(error: ToolwardenError) -> str:
    """Render a toolwarden error with its hint or captured output."""
    root = error.cause if isinstance(error, StepFailedError) else error
    details: list[str] = []
    suggestion: str | None = None
    if isinstance(root, NotInstalledError):
        suggestion = root.hint
    elif isinstance(root, ProvisionError | RenderError) and root.output.strip():
        details = root.output.strip().splitlines()[-5:]
    return format_error(error.message, details=details or None, suggestion=suggestion)


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for common CLI error handling.

    - KeyboardInterrupt: exit 130
    - ToolwardenError: formatted message, exit 1
    - anything else: logged with traceback, exit 1
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except ToolwardenError as e:
        err_console.print(describe_error(e), markup=False, highlight=False)
        raise SystemExit(ExitCode.FAILURE) from e
    except Exception as e:
        logger.exception("unexpected_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e


def run_steps(
    steps: Sequence[DependencyStep],
    mode: RunMode,
    *,
    quiet: bool = False,
) -> OrchestrationResult:
    """Run steps through the orchestrator, printing progress.

    Raises:
        StepFailedError: A step failed; the run stopped there.
    """
    result: OrchestrationResult | None = None
    for event in Orchestrator(steps).run_with_events(mode):
        if isinstance(event, RunStarted):
            if not quiet:
                names = ", ".join(event.steps) or "nothing"
                console.print(f"[bold]{_MODE_TITLES[mode]}[/bold] {names}")
        elif isinstance(event, StepStarted):
            if not quiet and event.phase is StepPhase.VERIFY and mode is RunMode.FULL:
                console.print(f"  [dim]post-install check:[/dim] {event.step_name}")
            elif not quiet:
                console.print(f"  [cyan]→[/cyan] {event.step_name}...")
        elif isinstance(event, StepPassed):
            if not quiet:
                suffix = f" ({event.outcome.replace('_', ' ')})" if event.outcome else ""
                console.print(
                    f"    [green]✓[/green] {event.step_name}{suffix} "
                    f"[dim]{event.duration_ms}ms[/dim]"
                )
        elif isinstance(event, StepFailed):
            err_console.print(f"    [red]✗[/red] {event.step_name}")
        elif isinstance(event, RunCompleted):
            result = event.result

    if result is None:
        raise IncompleteRunError()
    result.raise_for_failure()
    if not quiet:
        passed = {report.name for report in result.get_passed_steps()}
        console.print(format_success(f"{len(passed)} step(s) passed."))
    return result
