"""Sequential dependency orchestrator.

Steps run one at a time in declared order. The first failing step stops
the run; later steps never start. Nothing is retried.
"""

from __future__ import annotations

import time
from collections.abc import Iterator, Sequence
from enum import Enum

from toolwarden.exceptions import (
    DuplicateStepNameError,
    IncompleteRunError,
    ToolwardenError,
)
from toolwarden.logging import bind_context, get_logger, unbind_context
from toolwarden.orchestration.models import (
    DependencyStep,
    OrchestrationEvent,
    OrchestrationResult,
    RunCompleted,
    RunMode,
    RunStarted,
    StepFailed,
    StepPassed,
    StepPhase,
    StepReport,
    StepStarted,
)

__all__ = ["Orchestrator"]

logger = get_logger(__name__)


def _describe_outcome(outcome: object) -> str | None:
    if outcome is None:
        return None
    if isinstance(outcome, Enum):
        return str(outcome.value)
    return str(outcome)


class Orchestrator:
    """Run a fixed list of dependency steps in one of three modes.

    Example:
        ```python
        orchestrator = Orchestrator(dependency_steps(config))
        result = orchestrator.run(RunMode.VERIFY_ONLY)
        result.raise_for_failure()
        ```
    """

    def __init__(self, steps: Sequence[DependencyStep]) -> None:
        """Initialize the orchestrator.

        Args:
            steps: Steps in the order they must run.

        Raises:
            DuplicateStepNameError: Two steps share a name.
        """
        seen: set[str] = set()
        for step in steps:
            if step.name in seen:
                raise DuplicateStepNameError(step.name)
            seen.add(step.name)
        self._steps = tuple(steps)

    @property
    def steps(self) -> tuple[DependencyStep, ...]:
        return self._steps

    def select(self, mode: RunMode) -> tuple[DependencyStep, ...]:
        """Return the steps a run in ``mode`` applies to."""
        if mode is RunMode.MINIMAL:
            return tuple(s for s in self._steps if not s.privileged)
        return self._steps

    def run(self, mode: RunMode = RunMode.FULL) -> OrchestrationResult:
        """Run all selected steps and return the aggregated result."""
        result: OrchestrationResult | None = None
        for event in self.run_with_events(mode):
            if isinstance(event, RunCompleted):
                result = event.result
        if result is None:
            raise IncompleteRunError()
        return result

    def run_with_events(self, mode: RunMode = RunMode.FULL) -> Iterator[OrchestrationEvent]:
        """Run all selected steps, yielding progress events.

        Yields:
            RunStarted, then StepStarted and StepPassed/StepFailed per step
            phase, then RunCompleted carrying the OrchestrationResult.
        """
        steps = self.select(mode)
        yield RunStarted(mode=mode, steps=tuple(s.name for s in steps))
        logger.info("run_started", mode=mode.value, steps=[s.name for s in steps])

        if mode is RunMode.FULL:
            phases = (StepPhase.ENSURE, StepPhase.VERIFY)
        else:
            phases = (StepPhase.VERIFY,)

        start_time = time.monotonic()
        reports: list[StepReport] = []

        for phase in phases:
            if phase is StepPhase.VERIFY and mode is RunMode.FULL:
                logger.info("post_install_verification")
            for step in steps:
                yield StepStarted(step_name=step.name, phase=phase)
                report = self._run_step(step, phase)
                reports.append(report)

                if report.error is not None:
                    yield StepFailed(
                        step_name=step.name,
                        phase=phase,
                        duration_ms=report.duration_ms,
                        error=report.error,
                    )
                    result = OrchestrationResult(
                        success=False,
                        mode=mode,
                        reports=tuple(reports),
                        total_duration_ms=int((time.monotonic() - start_time) * 1000),
                        failed_step=step.name,
                        error=report.error,
                    )
                    logger.error(
                        "run_failed",
                        mode=mode.value,
                        step=step.name,
                        error=report.error.message,
                    )
                    yield RunCompleted(result=result)
                    return

                yield StepPassed(
                    step_name=step.name,
                    phase=phase,
                    duration_ms=report.duration_ms,
                    outcome=report.outcome,
                )

        result = OrchestrationResult(
            success=True,
            mode=mode,
            reports=tuple(reports),
            total_duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        logger.info("run_completed", mode=mode.value, steps=len(steps))
        yield RunCompleted(result=result)

    def _run_step(self, step: DependencyStep, phase: StepPhase) -> StepReport:
        action = step.ensure if phase is StepPhase.ENSURE else step.verify
        bind_context(step=step.name)
        start_time = time.monotonic()
        try:
            logger.info("step_started", phase=phase.value)
            outcome = action()
        except ToolwardenError as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            logger.warning("step_failed", phase=phase.value, error=e.message)
            return StepReport.failed(step.name, phase, duration_ms, e)
        finally:
            unbind_context("step")

        duration_ms = int((time.monotonic() - start_time) * 1000)
        described = _describe_outcome(outcome) if phase is StepPhase.ENSURE else None
        logger.info(
            "step_passed",
            step=step.name,
            phase=phase.value,
            outcome=described,
            duration_ms=duration_ms,
        )
        return StepReport.passed(step.name, phase, duration_ms, outcome=described)
