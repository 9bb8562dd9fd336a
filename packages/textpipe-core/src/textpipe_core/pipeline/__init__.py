"""Pipeline steps, the mutation API, and the wire format."""

from textpipe_core.pipeline.models import PipelineStep
from textpipe_core.pipeline.pipeline import IdFactory, Pipeline
from textpipe_core.pipeline.serialization import (
    SCHEMA_VERSION,
    PipelineDocument,
    StepRecord,
    dump_steps,
    load_steps,
)

__all__ = [
    "IdFactory",
    "Pipeline",
    "PipelineDocument",
    "PipelineStep",
    "SCHEMA_VERSION",
    "StepRecord",
    "dump_steps",
    "load_steps",
]
