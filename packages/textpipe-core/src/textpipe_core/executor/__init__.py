from textpipe_core.executor.executor import execute
from textpipe_core.executor.models import ExecutionResult, StepOutcome, StepStatus

__all__ = ["ExecutionResult", "StepOutcome", "StepStatus", "execute"]
