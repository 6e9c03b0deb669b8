"""Metadata augmentation: attach page metadata to resolved routes.

Walks the route tree in order, reads each route's page file off the event
loop and hands its text to the extractor.  Cancellation is checked before
every read; a cancelled walk stops where it is and leaves the remaining
routes untouched (the caller discards the result).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pagemap.cancellation import is_cancelled
from pagemap.meta.extractor import DEFAULT_MACRO, extract_page_meta

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagemap._types import MetaExtractor, PageMeta
    from pagemap.cancellation import CancellationToken
    from pagemap.routing.context import ResolveContext
    from pagemap.routing.tree import Route

_TSX_SUFFIXES = frozenset({".tsx", ".jsx"})


async def augment_routes(
    routes: Iterable[Route],
    token: CancellationToken | None = None,
    *,
    extractor: MetaExtractor | None = None,
    macro: str = DEFAULT_MACRO,
    context: ResolveContext | None = None,
) -> None:
    """Set ``meta`` on *routes* and all their descendants.

    Args:
        routes: Routes to enrich, in order.
        token: Cancellation token checked before each file read.
        extractor: ``contents -> mapping | None``.  Defaults to the
            tree-sitter extractor.
        macro: Declaration name for the default extractor.
        context: Pass context whose collector records read failures.

    """
    for route in routes:
        if is_cancelled(token):
            return

        if route.file:
            meta = await read_route_meta(
                route.file, extractor=extractor, macro=macro, context=context,
            )
            if meta:
                route.meta = meta

        if route.children:
            await augment_routes(
                route.children, token, extractor=extractor, macro=macro, context=context,
            )


async def read_route_meta(
    file: str,
    *,
    extractor: MetaExtractor | None = None,
    macro: str = DEFAULT_MACRO,
    context: ResolveContext | None = None,
) -> PageMeta | None:
    """Read *file* and return its metadata, or *None*.

    Read errors are printed and recorded, never raised.
    """
    path = Path(file)
    try:
        contents = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"  Read error: {path.name}: {exc}", file=sys.stderr)
        if context is not None and context.collector is not None:
            context.collector.record_metadata_skipped(file, str(exc))
        return None

    if extractor is None:
        result = extract_page_meta(
            contents,
            macro=macro,
            tsx=path.suffix in _TSX_SUFFIXES,
            source=file,
        )
    else:
        result = extractor(contents)
    return dict(result) if result else None
