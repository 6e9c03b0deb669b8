"""Pagemap: file-based route resolution for page directories.

Scans a ``pages/`` directory and derives the routing table a Nuxt-style
file router would build: names, path patterns with dynamic, optional and
catch-all parameters, nesting, and ``definePageMeta`` metadata.

Quick start::

    import asyncio
    from pathlib import Path

    import pagemap

    routes = asyncio.run(pagemap.resolve_routes("my-app/pages"))
    for route in routes:
        print(route.name, route.path)

Long-lived callers (editor integrations) keep a catalog instead::

    catalog = pagemap.RouteCatalog(pagemap.PagemapConfig(root=Path("my-app")))
    await catalog.rebuild()
    catalog.get("users-id")

"""

__version__ = "0.1.0"
__all__ = [
    "CancellationToken",
    "PagemapConfig",
    "Route",
    "RouteCatalog",
    "__version__",
    "load_config",
    "resolve_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pagemap`` fast; tree-sitter is only loaded when the
    resolver is first used.
    """
    if name == "PagemapConfig":
        from pagemap.config import PagemapConfig

        return PagemapConfig

    if name == "load_config":
        from pagemap.config_loader import load_config

        return load_config

    if name == "CancellationToken":
        from pagemap.cancellation import CancellationToken

        return CancellationToken

    if name == "Route":
        from pagemap.routing.tree import Route

        return Route

    if name == "RouteCatalog":
        from pagemap.catalog import RouteCatalog

        return RouteCatalog

    if name == "resolve_routes":
        from pagemap.resolver import resolve_routes

        return resolve_routes

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
