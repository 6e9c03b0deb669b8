"""Tests for pagemap.cancellation."""

import threading

from pagemap.cancellation import CancellationToken, is_cancelled


class TestCancellationToken:
    """One-shot flag shared between the loop and the watcher thread."""

    def test_starts_active(self) -> None:
        assert not CancellationToken().is_cancelled

    def test_cancel(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert token.is_cancelled

    def test_cancel_idempotent(self) -> None:
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.is_cancelled

    def test_cancel_from_thread(self) -> None:
        token = CancellationToken()
        thread = threading.Thread(target=token.cancel)
        thread.start()
        thread.join()
        assert token.is_cancelled

    def test_repr(self) -> None:
        token = CancellationToken()
        assert repr(token) == "<CancellationToken active>"
        token.cancel()
        assert repr(token) == "<CancellationToken cancelled>"


class TestIsCancelled:
    def test_none_never_cancelled(self) -> None:
        assert not is_cancelled(None)

    def test_follows_token(self) -> None:
        token = CancellationToken()
        assert not is_cancelled(token)
        token.cancel()
        assert is_cancelled(token)
