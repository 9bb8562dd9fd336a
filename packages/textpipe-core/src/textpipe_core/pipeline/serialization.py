"""Wire format for pipelines: ordered ``{kind, config, enabled}`` records.

Ids are not part of the format. Loading rebuilds the pipeline through
``Pipeline.add_step``, so every record is validated and gets a fresh id.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from textpipe_core.errors import PipelineDocumentError, TextpipeError
from textpipe_core.operations.registry import OperationRegistry
from textpipe_core.pipeline.pipeline import IdFactory, Pipeline

SCHEMA_VERSION = 1


class StepRecord(BaseModel):
    """Serialized form of one step."""

    model_config = ConfigDict(extra="forbid")

    kind: str = Field(min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("kind cannot be empty or whitespace")
        return v


def dump_steps(pipeline: Pipeline) -> list[dict[str, Any]]:
    return [
        StepRecord(kind=step.kind, config=step.config_dict(), enabled=step.enabled).model_dump()
        for step in pipeline.steps
    ]


def load_steps(
    records: Iterable[Any],
    registry: OperationRegistry | None = None,
    *,
    id_factory: IdFactory | None = None,
) -> Pipeline:
    """Build a Pipeline from records. Raises PipelineDocumentError naming the bad step."""
    pipeline = Pipeline(registry, id_factory=id_factory)
    for i, raw in enumerate(records):
        try:
            record = raw if isinstance(raw, StepRecord) else StepRecord.model_validate(raw)
            pipeline = pipeline.add_step(record.kind, record.config, enabled=record.enabled)
        except ValidationError as e:
            raise PipelineDocumentError(f"step {i}: {e}") from e
        except TextpipeError as e:
            raise PipelineDocumentError(f"step {i}: {e}") from e
    return pipeline


class PipelineDocument(BaseModel):
    """Versioned, named pipeline as exchanged between hosts."""

    model_config = ConfigDict(extra="forbid")

    version: Literal[1] = SCHEMA_VERSION
    name: str = "untitled"
    exported_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    steps: list[StepRecord] = Field(default_factory=list)

    @classmethod
    def from_pipeline(cls, pipeline: Pipeline, name: str = "untitled") -> PipelineDocument:
        return cls(name=name, steps=[StepRecord(**r) for r in dump_steps(pipeline)])

    def to_pipeline(
        self,
        registry: OperationRegistry | None = None,
        *,
        id_factory: IdFactory | None = None,
    ) -> Pipeline:
        return load_steps(self.steps, registry, id_factory=id_factory)

    # -- text formats ----------------------------------------------------

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_data(cls, data: Any) -> PipelineDocument:
        # A bare list is shorthand for a document with only steps
        if isinstance(data, list):
            data = {"steps": data}
        if not isinstance(data, dict):
            raise PipelineDocumentError(
                f"Expected a mapping or a list of steps, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PipelineDocumentError(f"Invalid pipeline document: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> PipelineDocument:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PipelineDocumentError(f"Invalid JSON: {e}") from e
        return cls.from_data(data)

    @classmethod
    def from_yaml(cls, text: str) -> PipelineDocument:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise PipelineDocumentError(f"Invalid YAML: {e}") from e
        if data is None:
            raise PipelineDocumentError("Pipeline document is empty")
        return cls.from_data(data)

    @classmethod
    def load(cls, path: str | Path) -> PipelineDocument:
        """Read a document from disk; ``.json`` files are JSON, anything else YAML."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PipelineDocumentError(f"Cannot read {path}: {e}") from e
        if path.suffix.lower() == ".json":
            return cls.from_json(text)
        return cls.from_yaml(text)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        text = self.to_json() if path.suffix.lower() == ".json" else self.to_yaml()
        path.write_text(text, encoding="utf-8")
        return path
