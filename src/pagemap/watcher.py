"""Pages watcher: signals when page files are added, changed or removed.

Runs watchfiles in a background thread over the project root and bridges
page-file changes to an asyncio queue.  watchfiles' debounce groups bursts
of edits; the route catalog cancels stale rebuilds for the rest.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pagemap.config import PagemapConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A page file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def is_page_change(path: Path, config: PagemapConfig) -> bool:
    """Whether *path* is a page file under the configured pages directory."""
    try:
        rel = path.relative_to(config.pages_path)
    except ValueError:
        return False

    parts = rel.parts
    if not parts:
        return False
    if any(part.startswith(".") for part in parts):
        return False

    return path.suffix.lstrip(".") in config.extensions


class PagesWatcher:
    """Watches the pages directory and yields page-file changes.

    The root is watched rather than the pages directory itself so that
    creating or removing ``pages/`` is noticed too.

    """

    def __init__(self, config: PagemapConfig) -> None:
        self._config = config
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Start watching in a background thread.

        Args:
            loop: Loop that consumes :meth:`changes`; defaults to the
                running loop.

        """
        if self.is_running:
            return

        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="pagemap-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur.

        Ends once the watcher is stopped and the queue is drained.

        """
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def _emit(self, event: ChangeEvent) -> None:
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        from watchfiles import watch

        for raw_changes in watch(
            self._config.root,
            stop_event=self._stop_event,
            debounce=self._config.debounce_ms,
            step=100,
        ):
            for change_type, path_str in raw_changes:
                path = Path(path_str)
                if not is_page_change(path, self._config):
                    continue

                kind = _CHANGE_KIND_MAP.get(change_type, "modified")
                self._emit(ChangeEvent(path=path, kind=kind))
