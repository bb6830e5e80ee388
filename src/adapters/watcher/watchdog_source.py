"""
Watchdog event source - Implements EventSource protocol.

A watchdog Observer watches the root recursively on its own thread and
only enqueues events. Iterating the source pulls them off the queue on
the caller's thread, so pipelines never run on the observer thread and
never overlap each other.
"""

import logging
import os
import queue
from collections.abc import Iterator

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from src.domain.ports import EventKind, FileEvent

logger = logging.getLogger(__name__)

_EVENT_KINDS = {
    "created": EventKind.CREATE,
    "modified": EventKind.MODIFY,
    "deleted": EventKind.DELETE,
    "moved": EventKind.MOVE,
}


def to_file_event(event: FileSystemEvent) -> FileEvent:
    """Translate a watchdog event into the domain's FileEvent."""
    paths = [os.fsdecode(event.src_path)]
    dest_path = getattr(event, "dest_path", "")
    if dest_path:
        paths.append(os.fsdecode(dest_path))
    kind = _EVENT_KINDS.get(event.event_type, EventKind.OTHER)
    return FileEvent(kind=kind, paths=tuple(paths))


class _QueueingHandler(FileSystemEventHandler):
    """Watchdog handler forwarding file events to a queue in arrival order."""

    def __init__(self, events: "queue.Queue[FileEvent]") -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._events.put(to_file_event(event))


class WatchdogEventSource:
    """
    Implements EventSource protocol via a watchdog Observer.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The stream is unbounded and not restartable: iterate it once.
    """

    def __init__(self, root: str) -> None:
        """
        Initialize event source.

        Args:
            root: Directory watched recursively, e.g. /home
        """
        self.root = root
        self._events: queue.Queue[FileEvent] = queue.Queue()
        self._handler = _QueueingHandler(self._events)
        self._observer = Observer()

    def __iter__(self) -> Iterator[FileEvent]:
        self._observer.schedule(self._handler, path=self.root, recursive=True)
        self._observer.start()
        logger.info("Watching %s for domain triggers", self.root)
        try:
            while True:
                yield self._events.get()
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop the observer thread."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()
            logger.info("Stopped watching %s", self.root)
