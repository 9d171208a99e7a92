"""Sequential verify/ensure orchestration over dependency steps."""

from __future__ import annotations

from toolwarden.orchestration.catalog import dependency_steps, docker_steps
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
from toolwarden.orchestration.orchestrator import Orchestrator

__all__ = [
    "DependencyStep",
    "OrchestrationEvent",
    "OrchestrationResult",
    "Orchestrator",
    "RunCompleted",
    "RunMode",
    "RunStarted",
    "StepFailed",
    "StepPassed",
    "StepPhase",
    "StepReport",
    "StepStarted",
    "dependency_steps",
    "docker_steps",
]
