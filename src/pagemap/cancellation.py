"""Cooperative cancellation for resolution runs.

One token per run.  The resolver checks it at coarse-grained points
(before and after enumeration, before post-processing, before each
metadata read); nothing inside the tokenizer polls it.

Thread Safety:
    Backed by ``threading.Event`` so the watcher thread may cancel a run
    that is executing on the event loop.

"""

import threading


class CancellationToken:
    """A one-shot cancellation flag.

    Usage::

        token = CancellationToken()
        task = asyncio.create_task(resolve_routes(pages, token))
        token.cancel()          # result of the task is now None

    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation.  Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Whether :meth:`cancel` has been called."""
        return self._event.is_set()

    def __repr__(self) -> str:
        state = "cancelled" if self.is_cancelled else "active"
        return f"<CancellationToken {state}>"


def is_cancelled(token: CancellationToken | None) -> bool:
    """Treat a missing token as never cancelled."""
    return token is not None and token.is_cancelled
