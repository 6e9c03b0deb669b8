"""Route tree builder: scanned page files to nested routes.

Files are processed shortest relative path first, so a layout page such as
``users.vue`` exists before ``users/[id].vue`` looks for it:

    users.vue          -> Route(name="users", path="/users")
    users/[id].vue     -> child Route(name="users/id", path="/:id()")

A file whose accumulated ``(name, path)`` header matches an existing route
in the current list descends into that route's children instead of
becoming a sibling.  Names keep their ``/`` separators here; the
post-processor turns them into dash-joined identifiers.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pagemap._errors import MalformedSegmentError
from pagemap._types import PageMeta, RouteMode
from pagemap.routing.context import ResolveContext
from pagemap.routing.pattern import join_url, render_segment, with_leading_slash
from pagemap.routing.scanner import ScannedFile
from pagemap.routing.tokens import is_group_only, segment_name, tokenize_segment

INDEX_PAGE_RE = re.compile(r"/index$")

_SERVER_SUFFIX = ".server"
_CLIENT_SUFFIX = ".client"


@dataclass(slots=True)
class Route:
    """One entry of the routing table.

    Mutable: the builder fills it in, the post-processor normalizes it and
    the augmenter attaches ``meta``.

    Attributes:
        path: URL path pattern (``/users/:id()``; relative for children).
        name: Route name, or *None* when suppressed.
        file: Absolute path of the page file.
        meta: Scalars from the page's metadata declaration, if any.
        alias: Alternative paths, copied through unchanged.
        mode: ``"client"`` for ``.client`` pages.
        children: Nested routes in file insertion order.

    """

    path: str = ""
    name: str | None = None
    file: str | None = None
    meta: PageMeta | None = None
    alias: str | list[str] | None = None
    mode: RouteMode | None = None
    children: list[Route] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; unset fields are omitted, children recurse."""
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["path"] = self.path
        if self.file is not None:
            data["file"] = self.file
        if self.meta is not None:
            data["meta"] = dict(self.meta)
        if self.alias is not None:
            data["alias"] = self.alias
        if self.mode is not None:
            data["mode"] = self.mode
        data["children"] = [child.to_dict() for child in self.children]
        return data


def build_route_tree(
    files: Iterable[ScannedFile],
    context: ResolveContext | None = None,
) -> list[Route]:
    """Assemble the route tree from scanned files.

    Files with a malformed segment are skipped with a warning; the rest
    still resolve.

    Args:
        files: Page files, already de-duplicated.
        context: Pass context for warnings.

    Returns:
        Top-level routes; nested routes are reachable via ``children``.

    """
    if context is None:
        context = ResolveContext()

    routes: list[Route] = []
    # sorted() is stable: equal lengths keep the incoming (locale) order
    for scanned in sorted(files, key=lambda f: len(f.relative_path)):
        try:
            _insert_file(scanned, routes, context)
        except MalformedSegmentError as exc:
            context.file_skipped(scanned.absolute_path, exc)
    return routes


def split_segments(relative_path: str) -> tuple[list[str], RouteMode | None]:
    """Strip the extension and mode marker, then split on ``/``.

    ``posts/[id].client.vue`` -> ``(["posts", "[id]"], "client")``

    """
    stem, _ext = posixpath.splitext(relative_path)
    segments = stem.split("/")
    mode: RouteMode | None = None

    last = segments[-1]
    if last.endswith(_SERVER_SUFFIX):
        segments[-1] = last[: -len(_SERVER_SUFFIX)]
    elif last.endswith(_CLIENT_SUFFIX):
        segments[-1] = last[: -len(_CLIENT_SUFFIX)]
        mode = "client"

    return segments, mode


def _insert_file(scanned: ScannedFile, routes: list[Route], context: ResolveContext) -> None:
    segments, mode = split_segments(scanned.relative_path)
    route = Route(path="", name="", file=scanned.absolute_path, mode=mode)

    # List the route will be appended to; moves down as layouts are matched
    parent = routes

    for i, segment in enumerate(segments):
        tokens = tokenize_segment(segment, source=scanned.absolute_path, context=context)

        if is_group_only(tokens):
            continue

        name_part = segment_name(tokens)
        route.name = f"{route.name}/{name_part}" if route.name else name_part

        following = segments[i + 1] if i + 1 < len(segments) else None
        rendered = render_segment(tokens, following is not None and following != "index")
        header_path = with_leading_slash(
            join_url(route.path, INDEX_PAGE_RE.sub("/", rendered))
        )

        layout = _find_sibling(parent, route.name, header_path)
        if layout is not None:
            parent = layout.children
            route.path = ""
        elif name_part == "index" and not route.path:
            route.path = "/"
        elif name_part != "index":
            route.path += rendered

    parent.append(route)


def _find_sibling(routes: list[Route], name: str, path: str) -> Route | None:
    for candidate in routes:
        if candidate.name == name and candidate.path == path:
            return candidate
    return None
