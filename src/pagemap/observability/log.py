"""Event log: bounded, thread-safe store of resolver events.

Resolution passes run in worker threads during metadata reads, so every
access goes through a ``threading.Lock``.  Once ``max_events`` is
reached the oldest events fall off the front.
"""

import threading
from collections import deque

from pagemap.observability.events import RouterEvent, RoutesResolved


def _event_path(event: RouterEvent) -> str:
    # Summary events describe a whole pages directory, the rest one file.
    if isinstance(event, RoutesResolved):
        return event.pages_dir
    return event.file or ""


class EventLog:
    """Ring buffer of ``RouterEvent`` objects.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[RouterEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: RouterEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[RouterEvent]:
        """Return matching events, most recent first.

        *path* matches as a substring of the event's page file, or of the
        pages directory for ``RoutesResolved``.
        """
        with self._lock:
            events = list(self._events)

        results: list[RouterEvent] = []
        for event in reversed(events):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in _event_path(event):
                continue
            results.append(event)
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
