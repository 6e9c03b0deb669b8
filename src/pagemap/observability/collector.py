"""Router collector: records resolver events into an event log.

Provides one ``record_*`` method per event type so the resolver never
builds event objects itself.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe to share between the catalog's rebuild tasks and the watcher.

"""

from __future__ import annotations

from pagemap.observability.events import (
    FileSkipped,
    MetadataSkipped,
    NameCollision,
    ParamCharDropped,
    RoutesResolved,
    now_ns,
)
from pagemap.observability.log import EventLog


class RouterCollector:
    """Event collector for resolution passes.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Builder events -----

    def record_param_char_dropped(self, file: str, segment: str, char: str) -> None:
        """Record a character dropped from a parameter name."""
        self._log.append(
            ParamCharDropped(file=file, segment=segment, char=char, timestamp_ns=now_ns())
        )

    def record_file_skipped(self, file: str, segment: str, reason: str) -> None:
        """Record a page file skipped because of a malformed segment."""
        self._log.append(
            FileSkipped(file=file, segment=segment, reason=reason, timestamp_ns=now_ns())
        )

    def record_name_collision(
        self,
        name: str,
        file: str | None,
        existing_file: str | None,
    ) -> None:
        """Record a duplicate route name."""
        self._log.append(
            NameCollision(
                name=name,
                file=file,
                existing_file=existing_file,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Metadata events -----

    def record_metadata_skipped(self, file: str, reason: str) -> None:
        """Record a metadata read failure."""
        self._log.append(MetadataSkipped(file=file, reason=reason, timestamp_ns=now_ns()))

    # ----- Pass summary -----

    def record_resolved(
        self,
        pages_dir: str,
        *,
        files: int = 0,
        routes: int = 0,
        cancelled: bool = False,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the end of a resolution pass."""
        self._log.append(
            RoutesResolved(
                pages_dir=pages_dir,
                files=files,
                routes=routes,
                cancelled=cancelled,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
