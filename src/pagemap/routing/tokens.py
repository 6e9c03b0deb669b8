"""Segment tokenizer: one path segment to typed tokens.

A segment is one ``/``-delimited piece of a page's relative path with the
extension removed.  Bracket and parenthesis syntax marks its parts:

    about            -> static("about")
    [id]             -> dynamic("id")
    [[slug]]         -> optional("slug")
    [...slug]        -> catchall("slug")
    (marketing)      -> group("marketing")
    user-[id]-edit   -> static("user-"), dynamic("id"), static("-edit")

The tokenizer is a character-at-a-time state machine.  Each state has one
handler in a dispatch table; the parameter states share a handler.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypeAlias

from pagemap._errors import EmptyParameterError, UnterminatedParameterError

if TYPE_CHECKING:
    from pagemap.routing.context import ResolveContext

TokenKind: TypeAlias = Literal["static", "dynamic", "optional", "catchall", "group"]

_State: TypeAlias = Literal["initial", "static", "dynamic", "optional", "catchall", "group"]

# Characters kept inside a parameter name (JS \w semantics, plus ".")
_PARAM_CHAR_RE = re.compile(r"[\w.]", re.ASCII)

# Buffer content that turns a parameter into a catch-all
_CATCHALL_MARKER = "..."


@dataclass(frozen=True, slots=True)
class SegmentToken:
    """One typed piece of a path segment.

    Attributes:
        kind: Syntactic role of the piece.
        value: Literal text or parameter name, syntax markers stripped.

    """

    kind: TokenKind
    value: str

    @property
    def is_group(self) -> bool:
        return self.kind == "group"


class _SegmentTokenizer:
    """Single-use state machine over one segment."""

    __slots__ = ("_buffer", "_context", "_handlers", "_index", "_segment", "_source", "_state", "_tokens")

    def __init__(
        self,
        segment: str,
        source: str,
        context: ResolveContext | None,
    ) -> None:
        self._segment = segment
        self._source = source
        self._context = context
        self._state: _State = "initial"
        self._buffer = ""
        self._index = 0
        self._tokens: list[SegmentToken] = []
        self._handlers: dict[_State, Callable[[str], bool]] = {
            "initial": self._on_initial,
            "static": self._on_static,
            "dynamic": self._on_param,
            "optional": self._on_param,
            "catchall": self._on_param,
            "group": self._on_param,
        }

    def run(self) -> tuple[SegmentToken, ...]:
        segment = self._segment
        while self._index < len(segment):
            # A handler returns False to re-examine the character in the new state
            if self._handlers[self._state](segment[self._index]):
                self._index += 1

        if self._state == "dynamic":
            msg = f'Unfinished param "{self._buffer}" in segment {segment!r}'
            raise UnterminatedParameterError(msg, segment)

        self._flush()
        return tuple(self._tokens)

    # ----- State handlers -----

    def _on_initial(self, char: str) -> bool:
        self._buffer = ""
        if char == "[":
            self._state = "dynamic"
        elif char == "(":
            self._state = "group"
        else:
            self._state = "static"
            return False
        return True

    def _on_static(self, char: str) -> bool:
        if char == "[":
            self._flush()
            self._state = "dynamic"
        elif char == "(":
            self._flush()
            self._state = "group"
        else:
            self._buffer += char
        return True

    def _on_param(self, char: str) -> bool:
        if self._buffer == _CATCHALL_MARKER:
            self._buffer = ""
            self._state = "catchall"

        if char == "[" and self._state == "dynamic":
            self._state = "optional"

        if char == "]" and self._closes_bracket():
            self._close()
        elif char == ")" and self._state == "group":
            self._close()
        elif _PARAM_CHAR_RE.match(char):
            self._buffer += char
        elif self._state in ("dynamic", "optional") and char not in "[]":
            if self._context is not None:
                self._context.param_char_dropped(self._source, self._segment, char)
        return True

    # ----- Helpers -----

    def _closes_bracket(self) -> bool:
        if self._state == "group":
            return False
        if self._state == "optional":
            # [[name]] closes on the second bracket only
            return self._index > 0 and self._segment[self._index - 1] == "]"
        return True

    def _close(self) -> None:
        if not self._buffer:
            what = "group" if self._state == "group" else "param"
            msg = f"Empty {what} in segment {self._segment!r}"
            raise EmptyParameterError(msg, self._segment)
        self._flush()
        self._state = "initial"

    def _flush(self) -> None:
        if not self._buffer:
            return
        state = self._state
        if state == "initial":  # buffer is always cleared on entering initial
            msg = f"Tokenizer flushed in initial state for {self._segment!r}"
            raise RuntimeError(msg)
        self._tokens.append(SegmentToken(kind=state, value=self._buffer))
        self._buffer = ""


def tokenize_segment(
    segment: str,
    *,
    source: str | None = None,
    context: ResolveContext | None = None,
) -> tuple[SegmentToken, ...]:
    """Split one path segment into typed tokens, left to right.

    Args:
        segment: Path segment without extension (e.g. ``"[id]"``).
        source: File the segment came from, used in warnings.
        context: Pass context that receives dropped-character warnings.

    Raises:
        UnterminatedParameterError: The segment ends inside ``[param``.
        EmptyParameterError: A parameter or group has no name.

    """
    return _SegmentTokenizer(segment, source or segment, context).run()


def is_group_only(tokens: tuple[SegmentToken, ...]) -> bool:
    """True if the segment only organizes files and adds no name or path.

    A segment with no tokens at all also qualifies.
    """
    return all(token.is_group for token in tokens)


def segment_name(tokens: tuple[SegmentToken, ...]) -> str:
    """Concatenate the non-group token values (``user-[id]`` -> ``user-id``)."""
    return "".join(token.value for token in tokens if not token.is_group)
