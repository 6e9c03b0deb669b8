"""Route catalog: the cached, name-indexed result of the latest resolution.

Editor integrations look routes up by name (``useRoute("users-id")``) far
more often than pages change, so the catalog keeps the last good table and
rebuilds it when told to.  Each rebuild cancels the one still in flight;
a cancelled or failed rebuild never replaces the table, and a finished one
swaps it in a single assignment.

Usage::

    catalog = RouteCatalog(load_config(Path(".")))
    await catalog.rebuild()
    route = catalog.get("users-id")

"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagemap._errors import EnumerationError
from pagemap.cancellation import CancellationToken
from pagemap.observability.collector import RouterCollector
from pagemap.observability.log import EventLog
from pagemap.resolver import resolve_routes

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from pagemap.config import PagemapConfig
    from pagemap.routing.tree import Route
    from pagemap.watcher import PagesWatcher


@dataclass(frozen=True, slots=True)
class RouteTable:
    """An immutable snapshot of one resolution.

    Attributes:
        routes: Flattened routes, children before parents.
        by_name: Name -> route; for duplicate names the shallowest wins.

    """

    routes: tuple[Route, ...] = ()
    by_name: dict[str, Route] = field(default_factory=dict)


def build_name_index(routes: Iterable[Route]) -> dict[str, Route]:
    """Index named routes, later entries overwriting earlier ones.

    On a flattened list parents come after their children, so the route
    closest to the root keeps a duplicated name.
    """
    index: dict[str, Route] = {}
    for route in routes:
        if route.name:
            index[route.name] = route
    return index


class RouteCatalog:
    """Name-indexed cache of a pages directory's routes.

    Args:
        config: Where the pages live and how to read them.
        collector: Receives resolver events; one backed by an
            ``EventLog(config.max_events)`` is created if omitted.

    """

    def __init__(self, config: PagemapConfig, collector: RouterCollector | None = None) -> None:
        self._config = config
        self._collector = (
            collector if collector is not None
            else RouterCollector(EventLog(max_events=config.max_events))
        )
        self._table = RouteTable()
        self._current: CancellationToken | None = None

    @property
    def config(self) -> PagemapConfig:
        return self._config

    @property
    def collector(self) -> RouterCollector:
        return self._collector

    @property
    def routes(self) -> tuple[Route, ...]:
        """Flattened routes of the latest completed resolution."""
        return self._table.routes

    def get(self, name: str) -> Route | None:
        """Return the route called *name*, or *None*."""
        return self._table.by_name.get(name)

    def names(self) -> list[str]:
        """Sorted route names."""
        return sorted(self._table.by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._table.by_name

    def __len__(self) -> int:
        return len(self._table.by_name)

    async def rebuild(self) -> bool:
        """Resolve the pages directory again and swap in the result.

        Cancels any rebuild still in flight.  Returns True if the table was
        replaced, False if this rebuild was cancelled or failed (the
        previous table stays in place).

        """
        if self._current is not None:
            self._current.cancel()
        token = CancellationToken()
        self._current = token

        try:
            routes = await resolve_routes(
                self._config.pages_path,
                token,
                pattern=self._config.glob_pattern,
                macro=self._config.meta_macro,
                collector=self._collector,
            )
        except EnumerationError as exc:
            if not token.is_cancelled:
                print(f"  Failed to build pages routes: {exc}", file=sys.stderr)
            return False
        finally:
            if self._current is token:
                self._current = None

        if routes is None or token.is_cancelled:
            return False

        self._table = RouteTable(routes=tuple(routes), by_name=build_name_index(routes))
        return True

    async def follow(
        self,
        watcher: PagesWatcher,
        on_update: Callable[[RouteCatalog], None] | None = None,
    ) -> None:
        """Rebuild on every page change until the watcher stops.

        Each change starts a new rebuild task, cancelling the previous one,
        so only the newest snapshot of the directory lands in the table.

        Args:
            watcher: Started watcher whose changes trigger rebuilds.
            on_update: Called after each rebuild that replaced the table.

        """
        pending: set[asyncio.Task[bool]] = set()

        def done(task: asyncio.Task[bool]) -> None:
            pending.discard(task)
            if on_update is None or task.cancelled() or task.exception() is not None:
                return
            if task.result():
                on_update(self)

        async for _event in watcher.changes():
            task = asyncio.create_task(self.rebuild())
            pending.add(task)
            task.add_done_callback(done)
        if pending:
            await asyncio.gather(*pending)

    def close(self) -> None:
        """Cancel any in-flight rebuild and drop the table."""
        if self._current is not None:
            self._current.cancel()
            self._current = None
        self._table = RouteTable()
