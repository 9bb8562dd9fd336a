"""Error taxonomy for the textpipe core.

Structural and configuration errors are raised synchronously by the registry
and the pipeline mutation API. ``OperationExecutionError`` is the only error
the executor recovers from; it is turned into a per-step diagnostic.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class TextpipeError(Exception):
    """Base class for all textpipe errors."""


@dataclass(frozen=True)
class Violation:
    """A single field-level configuration problem."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class UnknownOperationKind(TextpipeError):
    """Raised when an operation kind is not registered."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown operation kind: {kind!r}")


class ConfigValidationError(TextpipeError):
    """Raised when a step configuration does not match its operation's schema."""

    def __init__(self, kind: str, violations: Iterable[Violation]) -> None:
        self.kind = kind
        self.violations = tuple(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid config for {kind!r}: {details}")


class StepNotFound(TextpipeError):
    """Raised when a step id is not present in the pipeline."""

    def __init__(self, step_id: str) -> None:
        self.step_id = step_id
        super().__init__(f"No step with id {step_id!r}")


class PipelineIntegrityError(TextpipeError):
    """Raised when a reorder request is not a permutation of the current ids."""

    def __init__(
        self,
        message: str,
        *,
        missing: Iterable[str] = (),
        duplicated: Iterable[str] = (),
        foreign: Iterable[str] = (),
    ) -> None:
        self.missing = tuple(missing)
        self.duplicated = tuple(duplicated)
        self.foreign = tuple(foreign)
        super().__init__(message)


class OperationExecutionError(TextpipeError):
    """Raised by a transform that cannot produce output for its input."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind} failed: {reason}")


class PipelineInvariantError(TextpipeError):
    """An internal invariant was broken. Indicates a bug, not bad input."""


class PipelineDocumentError(TextpipeError):
    """Raised when a serialized pipeline document cannot be loaded."""
