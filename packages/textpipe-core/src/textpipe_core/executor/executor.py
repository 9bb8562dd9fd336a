"""Runs a pipeline's enabled steps, in order, over an input text."""

from __future__ import annotations

import logging
import time

from textpipe_core.errors import OperationExecutionError
from textpipe_core.executor.models import ExecutionResult, StepOutcome, StepStatus
from textpipe_core.pipeline.pipeline import Pipeline

logger = logging.getLogger(__name__)


def execute(pipeline: Pipeline, text: str) -> ExecutionResult:
    """Apply ``pipeline`` to ``text``.

    A step that raises OperationExecutionError is recorded as failed and the
    text carries on unchanged to the next step. Anything else escaping a step
    (e.g. its kind was unregistered after the step was created) is a bug and
    propagates.
    """
    registry = pipeline.registry
    current = text
    diagnostics: list[StepOutcome] = []

    for step in pipeline.steps:
        if not step.enabled:
            diagnostics.append(
                StepOutcome(
                    step_id=step.id,
                    kind=step.kind,
                    status=StepStatus.skipped,
                    chars_in=len(current),
                    chars_out=len(current),
                )
            )
            continue

        start = time.perf_counter()
        try:
            result = registry.apply(step.kind, step.config, current)
        except OperationExecutionError as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.warning("Step %s (%s) failed: %s", step.id, step.kind, e.reason)
            diagnostics.append(
                StepOutcome(
                    step_id=step.id,
                    kind=step.kind,
                    status=StepStatus.failed,
                    error=e.reason,
                    duration_ms=elapsed,
                    chars_in=len(current),
                    chars_out=len(current),
                )
            )
            continue

        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("Step %s (%s) ok in %.2fms", step.id, step.kind, elapsed)
        diagnostics.append(
            StepOutcome(
                step_id=step.id,
                kind=step.kind,
                status=StepStatus.ok,
                duration_ms=elapsed,
                chars_in=len(current),
                chars_out=len(result),
            )
        )
        current = result

    return ExecutionResult(output=current, diagnostics=tuple(diagnostics))
