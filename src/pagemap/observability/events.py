"""Event model for resolver observability.

Every warning the resolver prints is also recorded as one of these events,
so callers (and tests) can inspect what happened during a pass without
scraping stderr.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import TypeAlias


# ---------------------------------------------------------------------------
# Tokenizer / builder events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ParamCharDropped:
    """A character not allowed in a parameter name was ignored.

    Attributes:
        file: Page file whose path contains the segment.
        segment: The raw path segment.
        char: The dropped character.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    file: str
    segment: str
    char: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FileSkipped:
    """A page file was left out of the route tree.

    Attributes:
        file: Absolute path of the skipped file.
        segment: The segment that failed to tokenize.
        reason: Error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    file: str
    segment: str
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class NameCollision:
    """Two routes normalized to the same name.

    Attributes:
        name: The duplicated route name.
        file: File of the route that collided.
        existing_file: File of the route that registered the name first,
            or *None* if that route has no file.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    name: str
    file: str | None
    existing_file: str | None
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Metadata events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MetadataSkipped:
    """A route's metadata could not be read.

    Attributes:
        file: Page file path.
        reason: Error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    file: str
    reason: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Pass summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoutesResolved:
    """A resolution pass finished.

    Attributes:
        pages_dir: Directory that was scanned.
        files: Number of page files enumerated.
        routes: Number of routes in the flattened result.
        cancelled: True if the run was cancelled and its result discarded.
        duration_ms: Wall time of the pass in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pages_dir: str
    files: int
    routes: int
    cancelled: bool
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

RouterEvent: TypeAlias = (
    ParamCharDropped
    | FileSkipped
    | NameCollision
    | MetadataSkipped
    | RoutesResolved
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
