"""File watcher that keeps a live preview of a pipeline applied to an input file."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from textpipe_core.errors import PipelineDocumentError
from textpipe_core.operations.registry import OperationRegistry
from textpipe_core.pipeline.serialization import PipelineDocument
from textpipe_core.preview.controller import PreviewController, PreviewSnapshot
from textpipe_core.session import EditorSession

logger = logging.getLogger(__name__)


class _FileChangeHandler(FileSystemEventHandler):
    """Forwards events touching one of the watched files to the callback."""

    def __init__(self, paths: set[str], callback: Callable[[str], None]) -> None:
        super().__init__()
        self._paths = paths
        self._callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        # Editors often save by writing a temp file and renaming it over the target
        candidates = [event.src_path, getattr(event, "dest_path", "") or ""]
        for raw in candidates:
            if not raw:
                continue
            path = str(Path(raw).resolve())
            if path in self._paths:
                try:
                    self._callback(path)
                except Exception:
                    logger.exception("Watcher callback failed for %s", path)
                return


class FileWatcher:
    """Watches a fixed set of files and calls ``callback(path)`` when one changes.

    Parent directories are watched non-recursively; events for other files in
    them are ignored.
    """

    def __init__(self, paths: list[Path], callback: Callable[[str], None]) -> None:
        self._paths = {str(Path(p).resolve()) for p in paths}
        self._handler = _FileChangeHandler(self._paths, callback)
        self._observer: Observer | None = None

    @property
    def paths(self) -> set[str]:
        return set(self._paths)

    def start(self) -> None:
        if self._observer is not None:
            return
        self._observer = Observer()
        for directory in sorted({str(Path(p).parent) for p in self._paths}):
            self._observer.schedule(self._handler, directory, recursive=False)
        self._observer.start()
        logger.info("Watching %s", ", ".join(sorted(self._paths)))

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Stopped watching")


class LivePreview:
    """Re-runs a pipeline document over an input file whenever either changes.

    Recomputation goes through a PreviewController, so a burst of saves
    results in one run. An unreadable or invalid pipeline document is logged
    and the previous pipeline stays in effect.
    """

    def __init__(
        self,
        pipeline_path: Path,
        input_path: Path,
        *,
        registry: OperationRegistry | None = None,
        controller: PreviewController | None = None,
        on_update: Callable[[PreviewSnapshot], None] | None = None,
    ) -> None:
        self._pipeline_path = Path(pipeline_path).resolve()
        self._input_path = Path(input_path).resolve()
        self._registry = registry
        self._session = EditorSession(registry=registry, controller=controller)
        self._lock = threading.Lock()
        self._errors: list[str] = []
        if on_update is not None:
            self._session.controller.subscribe(on_update)
        self._watcher = FileWatcher([self._pipeline_path, self._input_path], self._on_change)

    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def reload_pipeline(self) -> bool:
        try:
            doc = PipelineDocument.load(self._pipeline_path)
            pipeline = doc.to_pipeline(self._registry)
        except PipelineDocumentError as e:
            logger.error("Keeping previous pipeline: %s", e)
            with self._lock:
                self._errors.append(str(e))
            return False
        self._session.load(pipeline)
        return True

    def reload_input(self) -> bool:
        try:
            text = self._input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", self._input_path, e)
            with self._lock:
                self._errors.append(str(e))
            return False
        self._session.set_input(text)
        return True

    def _on_change(self, path: str) -> None:
        if path == str(self._pipeline_path):
            self.reload_pipeline()
        elif path == str(self._input_path):
            self.reload_input()

    def start(self) -> None:
        self.reload_input()
        self.reload_pipeline()
        self._watcher.start()

    def stop(self) -> None:
        self._watcher.stop()
        self._session.close()
