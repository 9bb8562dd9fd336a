"""Pydantic models for execution results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class StepStatus(str, Enum):
    """Outcome of a single step in one run."""

    ok = "ok"
    skipped = "skipped"
    failed = "failed"


class StepOutcome(BaseModel):
    """Diagnostic record for one step."""

    model_config = ConfigDict(frozen=True)

    step_id: str
    kind: str
    status: StepStatus
    error: str | None = None
    duration_ms: float = 0.0
    chars_in: int = 0
    chars_out: int = 0


class ExecutionResult(BaseModel):
    """Final text plus one outcome per step, in pipeline order."""

    model_config = ConfigDict(frozen=True)

    output: str
    diagnostics: tuple[StepOutcome, ...] = ()

    @property
    def failures(self) -> tuple[StepOutcome, ...]:
        return tuple(d for d in self.diagnostics if d.status is StepStatus.failed)

    @property
    def ok(self) -> bool:
        return not self.failures
