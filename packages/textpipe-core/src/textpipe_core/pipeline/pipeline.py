"""Pipeline - an ordered, immutable collection of steps with a transactional mutation API."""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import replace
from typing import Any

from textpipe_core.errors import (
    ConfigValidationError,
    PipelineIntegrityError,
    PipelineInvariantError,
    StepNotFound,
    Violation,
)
from textpipe_core.operations.registry import OperationRegistry, builtin_registry
from textpipe_core.pipeline.models import PipelineStep

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

# How many times a misbehaving id factory may repeat itself before we give up
_MAX_ID_ATTEMPTS = 32


def _short_uuid() -> str:
    return uuid.uuid4().hex[:12]


def _require_mapping(kind: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigValidationError(
            kind, [Violation("<config>", "wrong type: expected a mapping of field names to values")]
        )
    return value


class Pipeline:
    """Ordered steps, validated against an operation registry.

    Pipelines are values: every mutation returns a new Pipeline and leaves the
    receiver untouched, including when the mutation fails. Ids are never
    reused within a pipeline's lineage, even after the step is removed.
    """

    def __init__(
        self,
        registry: OperationRegistry | None = None,
        *,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._registry = registry if registry is not None else builtin_registry()
        self._id_factory = id_factory or _short_uuid
        self._steps: tuple[PipelineStep, ...] = ()
        self._issued: frozenset[str] = frozenset()

    # -- queries ---------------------------------------------------------

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    @property
    def steps(self) -> tuple[PipelineStep, ...]:
        return self._steps

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(step.id for step in self._steps)

    @property
    def enabled_steps(self) -> tuple[PipelineStep, ...]:
        return tuple(step for step in self._steps if step.enabled)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[PipelineStep]:
        return iter(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return any(step.id == step_id for step in self._steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pipeline):
            return NotImplemented
        return self._steps == other._steps

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        kinds = ", ".join(f"{s.kind}{'' if s.enabled else ' (off)'}" for s in self._steps)
        return f"Pipeline([{kinds}])"

    def index(self, step_id: str) -> int:
        for i, step in enumerate(self._steps):
            if step.id == step_id:
                return i
        raise StepNotFound(step_id)

    def get(self, step_id: str) -> PipelineStep:
        return self._steps[self.index(step_id)]

    # -- mutations -------------------------------------------------------

    def add_step(
        self,
        kind: str,
        config: Mapping[str, Any] | None = None,
        *,
        enabled: bool = True,
    ) -> Pipeline:
        """Append a new step of ``kind``; ``config`` is merged over the kind's defaults."""
        defaults = self._registry.default_config(kind)
        overrides = _require_mapping(kind, config) if config is not None else {}
        overrides = self._registry.get(kind).canonical_keys(overrides)
        parsed = self._registry.parse(kind, {**defaults, **overrides})

        step = PipelineStep(id=self._new_id(), kind=kind, config=parsed, enabled=enabled)
        logger.debug("Added step %s (%s)", step.id, kind)
        return self._evolve(self._steps + (step,), issued=self._issued | {step.id})

    def remove_step(self, step_id: str) -> Pipeline:
        i = self.index(step_id)
        logger.debug("Removed step %s", step_id)
        return self._evolve(self._steps[:i] + self._steps[i + 1 :])

    def toggle_step(self, step_id: str) -> Pipeline:
        i = self.index(step_id)
        step = self._steps[i]
        return self._replace_at(i, replace(step, enabled=not step.enabled))

    def update_step(self, step_id: str, partial: Mapping[str, Any]) -> Pipeline:
        """Shallow-merge ``partial`` into the step's config.

        Fields not named in ``partial`` keep their current values.
        """
        i = self.index(step_id)
        step = self._steps[i]
        partial = self._registry.get(step.kind).canonical_keys(_require_mapping(step.kind, partial))
        parsed = self._registry.parse(step.kind, {**step.config_dict(), **partial})
        return self._replace_at(i, replace(step, config=parsed))

    def reorder_steps(self, new_order: Sequence[str]) -> Pipeline:
        """Reposition steps to match ``new_order``, a permutation of the current ids."""
        if isinstance(new_order, str):
            raise TypeError("new_order must be a sequence of step ids, not a string")
        order = list(new_order)
        current = self.ids
        current_set = set(current)
        counts = Counter(order)

        missing = [sid for sid in current if sid not in counts]
        duplicated = [sid for sid, n in counts.items() if n > 1]
        foreign = [sid for sid in counts if sid not in current_set]
        if missing or duplicated or foreign:
            problems = []
            if missing:
                problems.append(f"missing {missing}")
            if duplicated:
                problems.append(f"duplicated {duplicated}")
            if foreign:
                problems.append(f"unknown {foreign}")
            raise PipelineIntegrityError(
                "Reorder must be a permutation of the current step ids: " + ", ".join(problems),
                missing=missing,
                duplicated=duplicated,
                foreign=foreign,
            )

        by_id = {step.id: step for step in self._steps}
        return self._evolve(tuple(by_id[sid] for sid in order))

    def move_step(self, from_index: int, to_index: int) -> Pipeline:
        """Move the step at ``from_index`` so it ends up at ``to_index``."""
        n = len(self._steps)
        for idx in (from_index, to_index):
            if not -n <= idx < n:
                raise IndexError(f"step index {idx} out of range for {n} steps")
        order = list(self.ids)
        order.insert(to_index % n, order.pop(from_index))
        return self.reorder_steps(order)

    # -- internals -------------------------------------------------------

    def _new_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in self._issued:
                return candidate
        raise PipelineInvariantError(
            f"id factory produced no fresh id after {_MAX_ID_ATTEMPTS} attempts"
        )

    def _replace_at(self, i: int, step: PipelineStep) -> Pipeline:
        return self._evolve(self._steps[:i] + (step,) + self._steps[i + 1 :])

    def _evolve(
        self,
        steps: tuple[PipelineStep, ...],
        issued: frozenset[str] | None = None,
    ) -> Pipeline:
        ids = [step.id for step in steps]
        if len(set(ids)) != len(ids):
            raise PipelineInvariantError(f"duplicate step ids in {ids}")

        new = object.__new__(type(self))
        new._registry = self._registry
        new._id_factory = self._id_factory
        new._steps = steps
        new._issued = self._issued if issued is None else issued
        return new
