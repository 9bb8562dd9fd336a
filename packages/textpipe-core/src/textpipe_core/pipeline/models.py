"""Data models for pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from textpipe_core.operations.base import OperationConfig


@dataclass(frozen=True)
class PipelineStep:
    """One configured instance of an operation kind.

    Only ``Pipeline.add_step`` creates steps; the config is always the typed
    variant for ``kind``.
    """

    id: str
    kind: str
    config: OperationConfig
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("step id cannot be empty or whitespace")

    def config_dict(self) -> dict[str, Any]:
        return self.config.to_mapping()
