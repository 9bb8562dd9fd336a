"""textpipe core - operation registry, pipeline model, executor, and live preview."""

from textpipe_core.config import TextpipeConfig, load_config
from textpipe_core.errors import (
    ConfigValidationError,
    OperationExecutionError,
    PipelineDocumentError,
    PipelineIntegrityError,
    PipelineInvariantError,
    StepNotFound,
    TextpipeError,
    UnknownOperationKind,
    Violation,
)
from textpipe_core.executor import ExecutionResult, StepOutcome, StepStatus, execute
from textpipe_core.operations import Operation, OperationConfig, OperationRegistry, builtin_registry
from textpipe_core.pipeline import Pipeline, PipelineDocument, PipelineStep
from textpipe_core.plugins import default_registry
from textpipe_core.preview import ManualScheduler, PreviewController, PreviewSnapshot
from textpipe_core.session import EditorSession

__version__ = "0.1.0"

__all__ = [
    "ConfigValidationError",
    "EditorSession",
    "ExecutionResult",
    "ManualScheduler",
    "Operation",
    "OperationConfig",
    "OperationExecutionError",
    "OperationRegistry",
    "Pipeline",
    "PipelineDocument",
    "PipelineDocumentError",
    "PipelineIntegrityError",
    "PipelineInvariantError",
    "PipelineStep",
    "PreviewController",
    "PreviewSnapshot",
    "StepNotFound",
    "StepOutcome",
    "StepStatus",
    "TextpipeConfig",
    "TextpipeError",
    "UnknownOperationKind",
    "Violation",
    "builtin_registry",
    "default_registry",
    "execute",
    "load_config",
]
