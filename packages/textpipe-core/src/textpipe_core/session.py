"""EditorSession - the host-facing adapter that ties a pipeline to a live preview."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from textpipe_core.operations.registry import OperationInfo, OperationRegistry
from textpipe_core.pipeline.models import PipelineStep
from textpipe_core.pipeline.pipeline import Pipeline
from textpipe_core.preview.controller import PreviewController, PreviewSnapshot

logger = logging.getLogger(__name__)


class EditorSession:
    """Owns the current pipeline and input text for one editing session.

    Every successful change is forwarded to the preview controller. A failed
    mutation raises and leaves the session exactly as it was.
    """

    def __init__(
        self,
        pipeline: Pipeline | None = None,
        text: str = "",
        *,
        registry: OperationRegistry | None = None,
        controller: PreviewController | None = None,
    ) -> None:
        self._pipeline = pipeline if pipeline is not None else Pipeline(registry)
        self._text = text
        self._controller = controller or PreviewController()

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    @property
    def text(self) -> str:
        return self._text

    @property
    def controller(self) -> PreviewController:
        return self._controller

    @property
    def snapshot(self) -> PreviewSnapshot:
        return self._controller.snapshot

    def operations(self) -> list[OperationInfo]:
        return list(self._pipeline.registry.list())

    def set_input(self, text: str) -> None:
        self._text = text
        self._submit()

    def load(self, pipeline: Pipeline) -> None:
        """Replace the whole pipeline, e.g. after reading a saved document."""
        self._commit(pipeline)

    def add_step(
        self, kind: str, config: Mapping[str, Any] | None = None, *, enabled: bool = True
    ) -> PipelineStep:
        self._commit(self._pipeline.add_step(kind, config, enabled=enabled))
        return self._pipeline.steps[-1]

    def remove_step(self, step_id: str) -> None:
        self._commit(self._pipeline.remove_step(step_id))

    def toggle_step(self, step_id: str) -> PipelineStep:
        self._commit(self._pipeline.toggle_step(step_id))
        return self._pipeline.get(step_id)

    def update_step(self, step_id: str, partial: Mapping[str, Any]) -> PipelineStep:
        self._commit(self._pipeline.update_step(step_id, partial))
        return self._pipeline.get(step_id)

    def reorder_steps(self, new_order: Sequence[str]) -> None:
        self._commit(self._pipeline.reorder_steps(new_order))

    def move_step(self, from_index: int, to_index: int) -> None:
        self._commit(self._pipeline.move_step(from_index, to_index))

    def close(self) -> None:
        self._controller.cancel()

    def _commit(self, pipeline: Pipeline) -> None:
        self._pipeline = pipeline
        self._submit()

    def _submit(self) -> None:
        epoch = self._controller.request(self._pipeline, self._text)
        logger.debug("Session submitted preview epoch %d (%d steps)", epoch, len(self._pipeline))
