"""Pass-scoped state for one resolution run.

Holds the route-name registry used for collision warnings and the
collector that receives structured events.  A fresh context is created per
run, so builder and post-processor stay free of module-level state.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagemap._errors import MalformedSegmentError
    from pagemap.observability.collector import RouterCollector
    from pagemap.routing.tree import Route


class ResolveContext:
    """Warnings and the name registry for a single resolution pass.

    Args:
        collector: Optional collector that records an event for every
            warning.  Warnings are printed to stderr either way.

    """

    __slots__ = ("_collector", "_names")

    def __init__(self, collector: RouterCollector | None = None) -> None:
        self._collector = collector
        self._names: dict[str, Route] = {}

    @property
    def collector(self) -> RouterCollector | None:
        return self._collector

    @property
    def names(self) -> frozenset[str]:
        """Route names retained so far in this pass."""
        return frozenset(self._names)

    def warn(self, message: str) -> None:
        """Print a warning to stderr."""
        print(f"  Warning: {message}", file=sys.stderr)

    # ----- Tokenizer / builder -----

    def param_char_dropped(self, file: str, segment: str, char: str) -> None:
        self.warn(
            f"'{char}' is not allowed in a dynamic route parameter and has been "
            f"ignored. Consider renaming `{file}`."
        )
        if self._collector is not None:
            self._collector.record_param_char_dropped(file, segment, char)

    def file_skipped(self, file: str, error: MalformedSegmentError) -> None:
        self.warn(f"Skipping `{file}`: {error}")
        if self._collector is not None:
            self._collector.record_file_skipped(file, error.segment, str(error))

    # ----- Post-processor -----

    def check_name(self, route: Route) -> None:
        """Warn if *route*'s name was already retained.  Never renames."""
        if not route.name or route.name not in self._names:
            return
        existing = self._names[route.name]
        if existing.file:
            extra = f"is the same as `{existing.file}`"
        else:
            extra = "is a duplicate"
        self.warn(
            f"Route name generated for `{route.file}` {extra}. You may wish to "
            f"set a custom name using `definePageMeta` within the page file."
        )
        if self._collector is not None:
            self._collector.record_name_collision(route.name, route.file, existing.file)

    def register_name(self, route: Route) -> None:
        """Retain *route*'s name; the first route to claim a name keeps it."""
        if route.name:
            self._names.setdefault(route.name, route)
