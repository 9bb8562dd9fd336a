from textpipe_core.preview.controller import PreviewController, PreviewSnapshot
from textpipe_core.preview.scheduler import (
    AsyncioScheduler,
    Handle,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "Handle",
    "ManualScheduler",
    "PreviewController",
    "PreviewSnapshot",
    "Scheduler",
    "ThreadingScheduler",
]
