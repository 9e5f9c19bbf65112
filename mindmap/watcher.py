"""
File system watcher that re-renders a concept map when its source changes.

- Watchdog-based monitoring of the source file's directory
- Debounced change notification (editors often write several times per save)
- Content hashing so touch-only writes do not trigger a rebuild
"""

import hashlib
import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer


def compute_file_hash(path: Path) -> str | None:
    try:
        return hashlib.sha256(path.read_bytes()).hexdigest()
    except OSError:
        return None


class SourceFileHandler(FileSystemEventHandler):
    """
    Tracks one source file and reports debounced content changes.

    Created, modified and moved-into-place events all count as changes; the
    callback fires once the file has been quiet for DEBOUNCE_SECONDS and its
    content hash differs from the last one reported.
    """

    DEBOUNCE_SECONDS = 0.5

    def __init__(self, source: Path, on_change: Callable[[Path], None]):
        super().__init__()
        self.source = source.resolve()
        self.on_change = on_change
        self.pending_since: float | None = None
        self.last_hash = compute_file_hash(self.source)

    def _is_source(self, path: str) -> bool:
        return Path(path).resolve() == self.source

    def _mark(self) -> None:
        self.pending_since = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_source(event.src_path):
            self._mark()

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_source(event.src_path):
            self._mark()

    def on_moved(self, event: FileSystemEvent) -> None:
        # editors that save via rename land the new content here
        if not event.is_directory and self._is_source(event.dest_path):
            self._mark()

    def flush_pending(self) -> bool:
        """Fire the callback if a change has settled. Returns True if it fired."""
        if self.pending_since is None:
            return False
        if time.time() - self.pending_since < self.DEBOUNCE_SECONDS:
            return False
        self.pending_since = None

        new_hash = compute_file_hash(self.source)
        if new_hash is None or new_hash == self.last_hash:
            return False
        self.last_hash = new_hash
        self.on_change(self.source)
        return True


def watch_source(source: Path, on_change: Callable[[Path], None]) -> tuple[Observer, SourceFileHandler]:
    """
    Start watching `source` for content changes.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    handler = SourceFileHandler(source, on_change)
    observer = Observer()
    observer.schedule(handler, str(handler.source.parent), recursive=False)
    observer.start()
    return observer, handler


def run_watch_loop(source: Path, on_change: Callable[[Path], None]) -> None:
    """
    Run the watch loop until interrupted.

    Blocking; pending changes are flushed on a short poll interval.
    """
    observer, handler = watch_source(source, on_change)

    try:
        while True:
            time.sleep(0.25)
            handler.flush_pending()
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
