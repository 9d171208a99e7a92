"""Dataclass models for dependency orchestration.

This module defines:
- RunMode: which operation a run applies to its steps
- StepPhase: whether a step was being ensured or verified
- DependencyStep: a named verify/ensure pair owned by one run
- StepReport: the outcome of one step in one phase
- OrchestrationResult: the aggregated outcome of a run
- Run events: RunStarted, StepStarted, StepPassed, StepFailed, RunCompleted
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from toolwarden.exceptions import StepFailedError, ToolwardenError
from toolwarden.resources.models import ResourceState, state_for_error
from toolwarden.resources.protocols import SelfHealingResource

__all__ = [
    "RunMode",
    "StepPhase",
    "DependencyStep",
    "StepReport",
    "OrchestrationResult",
    "RunStarted",
    "StepStarted",
    "StepPassed",
    "StepFailed",
    "RunCompleted",
    "OrchestrationEvent",
]


class RunMode(str, Enum):
    """How a run treats its steps.

    FULL ensures every step, then verifies them all once more.
    VERIFY_ONLY verifies every step. MINIMAL verifies the unprivileged ones.
    """

    FULL = "full"
    VERIFY_ONLY = "verify"
    MINIMAL = "minimal"


class StepPhase(str, Enum):
    ENSURE = "ensure"
    VERIFY = "verify"


@dataclass(frozen=True, slots=True)
class DependencyStep:
    """A named dependency the orchestrator runs.

    Attributes:
        name: Unique step name; failures are attributed to it.
        verify: Zero-argument check; raises ToolwardenError on failure.
        ensure: Zero-argument self-heal; raises ToolwardenError on failure.
            Its return value, if any, is recorded as the step outcome.
        privileged: True when ensuring the step needs elevated rights.
            MINIMAL runs skip privileged steps.
    """

    name: str
    verify: Callable[[], object]
    ensure: Callable[[], object]
    privileged: bool = False

    @classmethod
    def from_resource(
        cls,
        resource: SelfHealingResource,
        *,
        privileged: bool = False,
    ) -> DependencyStep:
        """Build a step from any object satisfying SelfHealingResource."""
        return cls(
            name=resource.name,
            verify=resource.verify,
            ensure=resource.ensure,
            privileged=privileged,
        )


@dataclass(frozen=True, slots=True)
class StepReport:
    """Outcome of one step in one phase.

    Attributes:
        name: Step name.
        phase: ENSURE or VERIFY.
        state: Resource state derived from the outcome.
        duration_ms: How long the step took.
        outcome: String value of what ``ensure()`` returned, if anything.
        error: The failure, when the step failed.
    """

    name: str
    phase: StepPhase
    state: ResourceState
    duration_ms: int = 0
    outcome: str | None = None
    error: ToolwardenError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def passed(
        cls,
        name: str,
        phase: StepPhase,
        duration_ms: int,
        outcome: str | None = None,
    ) -> StepReport:
        return cls(
            name=name,
            phase=phase,
            state=state_for_error(None),
            duration_ms=duration_ms,
            outcome=outcome,
        )

    @classmethod
    def failed(
        cls,
        name: str,
        phase: StepPhase,
        duration_ms: int,
        error: ToolwardenError,
    ) -> StepReport:
        return cls(
            name=name,
            phase=phase,
            state=state_for_error(error),
            duration_ms=duration_ms,
            error=error,
        )


@dataclass(frozen=True, slots=True)
class OrchestrationResult:
    """Aggregated outcome of an orchestrator run.

    Either every selected step passed, or the run stopped at the first
    failure and ``failed_step``/``error`` describe it.

    Attributes:
        success: True if every step passed.
        mode: The mode the run used.
        reports: Per-step reports in execution order.
        total_duration_ms: Wall time of the whole run.
        failed_step: Name of the step that stopped the run.
        error: The exception that stopped the run.
        timestamp: Unix timestamp when the run completed.
    """

    success: bool
    mode: RunMode
    reports: tuple[StepReport, ...]
    total_duration_ms: int = 0
    failed_step: str | None = None
    error: ToolwardenError | None = None
    timestamp: float = field(default_factory=time.time)

    def raise_for_failure(self) -> None:
        """Raise StepFailedError if the run failed.

        Raises:
            StepFailedError: Names the failing step and carries its error
                as ``cause``.
        """
        if self.success or self.failed_step is None or self.error is None:
            return
        raise StepFailedError(self.failed_step, self.error) from self.error

    def get_passed_steps(self) -> tuple[StepReport, ...]:
        return tuple(r for r in self.reports if r.success)


@dataclass(frozen=True, slots=True)
class RunStarted:
    """Event emitted when a run begins.

    Attributes:
        mode: The run mode.
        steps: Names of the steps selected for this run, in order.
        timestamp: Unix timestamp when the run started.
    """

    mode: RunMode
    steps: tuple[str, ...]
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, slots=True)
class StepStarted:
    """Event emitted when a step begins a phase."""

    step_name: str
    phase: StepPhase
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, slots=True)
class StepPassed:
    """Event emitted when a step phase succeeds.

    Attributes:
        step_name: Name of the step.
        phase: ENSURE or VERIFY.
        duration_ms: How long the phase took.
        outcome: String value of what ``ensure()`` returned, if anything.
        timestamp: Unix timestamp of completion.
    """

    step_name: str
    phase: StepPhase
    duration_ms: int
    outcome: str | None = None
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, slots=True)
class StepFailed:
    """Event emitted when a step phase fails. No later step runs."""

    step_name: str
    phase: StepPhase
    duration_ms: int
    error: ToolwardenError
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, slots=True)
class RunCompleted:
    """Event emitted when a run ends, successfully or not.

    Attributes:
        result: The aggregated result of the run.
    """

    result: OrchestrationResult
    timestamp: float = field(default_factory=time.time)


OrchestrationEvent = RunStarted | StepStarted | StepPassed | StepFailed | RunCompleted
