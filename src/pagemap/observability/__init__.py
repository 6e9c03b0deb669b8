"""Resolver observability: structured events for every warning.

Warnings are printed to stderr for humans and recorded here for code:

- **Builder**: dropped parameter characters, skipped files
- **Post-processor**: route name collisions
- **Augmenter**: unreadable page files
- **Resolver**: one summary event per pass

Quick Start:
    >>> from pagemap.observability import RouterCollector, EventLog
    >>> log = EventLog()
    >>> collector = RouterCollector(log)
    >>> # routes = await resolve_routes(pages, collector=collector)
    >>> # log.query(event_type=NameCollision)

"""

from pagemap.observability.collector import RouterCollector
from pagemap.observability.events import (
    FileSkipped,
    MetadataSkipped,
    NameCollision,
    ParamCharDropped,
    RouterEvent,
    RoutesResolved,
    now_ns,
)
from pagemap.observability.log import EventLog

__all__ = [
    "EventLog",
    "FileSkipped",
    "MetadataSkipped",
    "NameCollision",
    "ParamCharDropped",
    "RouterCollector",
    "RouterEvent",
    "RoutesResolved",
    "now_ns",
]
