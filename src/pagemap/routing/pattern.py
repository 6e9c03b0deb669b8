"""Path-pattern generation: tokens to a URL path fragment.

Renders one segment's contribution to a route path:

    static("users")      -> /users
    dynamic("id")        -> /:id()
    optional("slug")     -> /:slug?
    catchall("slug")     -> /:slug(.*)*       (last segment)
                         -> /:slug([^/]*)*    (non-index segment follows)
    group("admin")       -> (nothing)

Also provides the small URL join helpers the tree builder uses to compare
accumulated paths.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from pagemap.routing.tokens import SegmentToken

# Characters encodeURI leaves alone, minus the ones an encoded path must
# escape anyway (# ? & +).  ``|`` is kept readable.
_PATH_SAFE = ";,/:@=$-_.!~*'()|"


def encode_static(value: str) -> str:
    """Percent-encode literal path text and escape ``:`` as ``\\:``."""
    return quote(value, safe=_PATH_SAFE).replace(":", "\\:")


def render_token(token: SegmentToken, has_following_segment: bool = False) -> str:
    """Render a single token (without the leading slash)."""
    kind = token.kind
    if kind == "optional":
        return f":{token.value}?"
    if kind == "dynamic":
        return f":{token.value}()"
    if kind == "catchall":
        if has_following_segment:
            return f":{token.value}([^/]*)*"
        return f":{token.value}(.*)*"
    if kind == "group":
        return ""
    return encode_static(token.value)


def render_segment(
    tokens: Iterable[SegmentToken],
    has_following_segment: bool = False,
) -> str:
    """Render one segment's path contribution, always starting with ``/``.

    Args:
        tokens: Tokens of one segment, in order.
        has_following_segment: True when a non-index segment follows; only
            affects catch-all parameters.

    """
    return "/" + "".join(render_token(token, has_following_segment) for token in tokens)


def join_url(base: str, *parts: str) -> str:
    """Join URL pieces with exactly one slash between them.

    Empty parts and bare ``"/"`` are skipped; a leading ``/`` or ``./`` on
    a part is dropped when there is already a base to join onto.

    ``join_url("/users", "/:id()")`` -> ``/users/:id()``
    ``join_url("", "/users")``       -> ``/users``
    ``join_url("/users", "/")``      -> ``/users``

    """
    url = base or ""
    for part in parts:
        if not part or part == "/":
            continue
        if url:
            if part.startswith("./"):
                part = part[2:]
            elif part.startswith("/"):
                part = part[1:]
            url = (url if url.endswith("/") else url + "/") + part
        else:
            url = part
    return url


def with_leading_slash(path: str) -> str:
    """Ensure *path* starts with ``/`` (``""`` becomes ``"/"``)."""
    return path if path.startswith("/") else "/" + path
