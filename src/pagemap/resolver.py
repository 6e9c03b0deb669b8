"""Resolver: pages directory to a flattened routing table.

The single public entry point, :func:`resolve_routes`, runs the full pass:

    enumerate -> scan (sort, de-dupe) -> build tree -> finalize
              -> augment metadata -> flatten

Cancellation is checked before and after enumeration, before
post-processing, before every metadata read and before flattening.  A
cancelled run returns *None*, never a partial list, so callers can tell it
apart from an empty pages directory.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from pagemap.cancellation import is_cancelled
from pagemap.meta.augment import augment_routes
from pagemap.meta.extractor import DEFAULT_MACRO
from pagemap.routing.context import ResolveContext
from pagemap.routing.finalize import finalize_routes, flatten_routes, unique_by_path
from pagemap.routing.scanner import DEFAULT_PATTERN, collect_scanned_files, enumerate_page_files
from pagemap.routing.tree import Route, build_route_tree

if TYPE_CHECKING:
    from pagemap._types import MetaExtractor
    from pagemap.cancellation import CancellationToken
    from pagemap.observability.collector import RouterCollector

# (root, pattern, token) -> relative "/"-separated file paths
FileEnumerator: TypeAlias = "Callable[[str | Path, str, CancellationToken | None], list[str]]"


async def resolve_routes(
    pages_dir: str | Path,
    token: CancellationToken | None = None,
    *,
    pattern: str = DEFAULT_PATTERN,
    enumerator: FileEnumerator = enumerate_page_files,
    extractor: MetaExtractor | None = None,
    macro: str = DEFAULT_MACRO,
    collector: RouterCollector | None = None,
) -> list[Route] | None:
    """Resolve every page under *pages_dir* into a flat list of routes.

    Args:
        pages_dir: Directory containing page files.
        token: Cancellation token for this run.
        pattern: Glob selecting page files (``{a,b}`` alternatives allowed).
        enumerator: File enumerator; defaults to pathlib globbing.
        extractor: Source-metadata extractor; defaults to the tree-sitter
            ``definePageMeta`` reader.
        macro: Declaration name used by the default extractor.
        collector: Receives warning and summary events.

    Returns:
        Routes flattened children-first, or ``[]`` when the directory is
        missing or empty, or *None* when the run was cancelled.

    Raises:
        EnumerationError: If the pages directory cannot be scanned.

    """
    t0 = time.perf_counter()
    base = Path(pages_dir).resolve()

    def finish(routes: list[Route] | None, files: int) -> list[Route] | None:
        if collector is not None:
            collector.record_resolved(
                str(base),
                files=files,
                routes=len(routes) if routes is not None else 0,
                cancelled=routes is None,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        return routes

    if is_cancelled(token):
        return finish(None, 0)

    relative_paths = enumerator(base, pattern, token)

    if is_cancelled(token):
        return finish(None, len(relative_paths))

    files = collect_scanned_files(base, relative_paths)
    if not files:
        return finish([], 0)

    context = ResolveContext(collector)
    tree = build_route_tree(files, context)

    if is_cancelled(token):
        return finish(None, len(files))

    roots = unique_by_path(finalize_routes(tree, context))
    await augment_routes(roots, token, extractor=extractor, macro=macro, context=context)

    if is_cancelled(token):
        return finish(None, len(files))

    return finish(flatten_routes(roots), len(files))
