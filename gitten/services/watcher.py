"""Filesystem watcher feeding a single-slot event channel"""

import queue
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from watchfiles import watch

from gitten.logging_config import get_logger

logger = get_logger(__name__)

# Milliseconds watchfiles waits to group a burst of changes into one event
WATCH_DEBOUNCE_MS = 400
PUBLISH_RETRY_SECONDS = 0.1


@dataclass(frozen=True)
class WatchEvent:
    """One batch of filesystem changes."""
    paths: Tuple[str, ...]

    @property
    def first_path(self) -> Optional[str]:
        return self.paths[0] if self.paths else None


class WorkspaceWatcher:
    """Watches the workspace tree on a background thread.

    Batches are pushed into ``events``, a queue holding at most one pending
    event; the producer blocks while the slot is taken, so the consumer has
    to drain it every loop iteration.
    """

    def __init__(self, root_path: str, events: Optional[queue.Queue] = None):
        self.root_path = root_path
        self.events: queue.Queue = events if events is not None else queue.Queue(maxsize=1)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="gitten-watcher", daemon=True)
        self._thread.start()
        logger.info(f"Watching {self.root_path}")

    def stop(self, timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        try:
            # No filter: changes inside .git (HEAD, index, refs) matter here
            for changes in watch(
                self.root_path,
                watch_filter=None,
                debounce=WATCH_DEBOUNCE_MS,
                stop_event=self._stop_event,
                recursive=True,
                raise_interrupt=False,
            ):
                paths = tuple(sorted(path for _, path in changes))
                if paths:
                    self.publish(WatchEvent(paths))
        except Exception as e:
            logger.error(f"Filesystem watcher stopped: {e}", exc_info=True)

    def publish(self, event: WatchEvent) -> bool:
        """Hand an event to the consumer, waiting while the slot is full.

        Returns False if the watcher was stopped before the event was taken.
        """
        while not self._stop_event.is_set():
            try:
                self.events.put(event, timeout=PUBLISH_RETRY_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def poll(self) -> Optional[WatchEvent]:
        """Non-blocking receive of at most one event."""
        try:
            return self.events.get_nowait()
        except queue.Empty:
            return None
