"""File-based route resolution.

Turns the files of a pages directory into a nested routing table using
Nuxt-style naming conventions (``[id]``, ``[[slug]]``, ``[...slug]``,
``(group)``).

Public API::

    from pagemap.routing import build_route_tree, finalize_routes, flatten_routes

    files = collect_scanned_files(pages, enumerate_page_files(pages))
    routes = flatten_routes(finalize_routes(build_route_tree(files)))
"""

from pagemap.routing.context import ResolveContext
from pagemap.routing.finalize import (
    find_route_by_name,
    finalize_routes,
    flatten_routes,
    normalize_route_name,
    unique_by_path,
)
from pagemap.routing.pattern import render_segment
from pagemap.routing.scanner import ScannedFile, collect_scanned_files, enumerate_page_files
from pagemap.routing.tokens import SegmentToken, tokenize_segment
from pagemap.routing.tree import Route, build_route_tree

__all__ = [
    "ResolveContext",
    "Route",
    "ScannedFile",
    "SegmentToken",
    "build_route_tree",
    "collect_scanned_files",
    "enumerate_page_files",
    "finalize_routes",
    "find_route_by_name",
    "flatten_routes",
    "normalize_route_name",
    "render_segment",
    "tokenize_segment",
    "unique_by_path",
]
