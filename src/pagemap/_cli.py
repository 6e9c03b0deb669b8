"""Pagemap CLI: pagemap routes / pagemap watch.

Entry point for the ``pagemap`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagemap.catalog import RouteCatalog
    from pagemap.config import PagemapConfig
    from pagemap.routing.tree import Route


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pagemap CLI."""
    parser = argparse.ArgumentParser(
        prog="pagemap",
        description="Resolve a pages directory into a file-based routing table.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pagemap routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved routes",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument("--pages-dir", default=None, help="Pages directory (default: pages)")
    routes_parser.add_argument(
        "--format", choices=("json", "table"), default="table", help="Output format",
    )
    routes_parser.add_argument("--name", default=None, help="Only print the route with this name")

    # pagemap watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Re-resolve routes whenever a page changes",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    watch_parser.add_argument("--pages-dir", default=None, help="Pages directory (default: pages)")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pagemap import __version__

    return __version__


def format_table(routes: list[Route] | tuple[Route, ...]) -> str:
    """Render routes as aligned ``name  path  file`` rows."""
    rows = [(route.name or "-", route.path or '""', route.file or "") for route in routes]
    if not rows:
        return "(no routes)"
    name_width = max(len(row[0]) for row in rows)
    path_width = max(len(row[1]) for row in rows)
    return "\n".join(
        f"{name:<{name_width}}  {path:<{path_width}}  {file}".rstrip()
        for name, path, file in rows
    )


def format_summary(catalog: RouteCatalog) -> str:
    """Describe the catalog's latest resolution pass in one line."""
    from pagemap.observability.events import RoutesResolved

    count = len(catalog.routes)
    latest = catalog.collector.log.query(event_type=RoutesResolved, limit=1)
    if not latest:
        return f"{count} routes"
    event = latest[0]
    return f"{count} routes from {event.files} files in {event.duration_ms:.1f}ms"


def _print_routes(catalog: RouteCatalog, fmt: str, name: str | None) -> int:
    if name is not None:
        route = catalog.get(name)
        if route is None:
            print(f"No route named {name!r}", file=sys.stderr)
            return 1
        selected = [route]
    else:
        selected = list(catalog.routes)

    if fmt == "json":
        print(json.dumps([route.to_dict() for route in selected], indent=2))
    else:
        print(format_table(selected))
    return 0


async def _routes(config: PagemapConfig, fmt: str, name: str | None) -> int:
    from pagemap.catalog import RouteCatalog

    catalog = RouteCatalog(config)
    if not await catalog.rebuild():
        return 1
    return _print_routes(catalog, fmt, name)


async def _watch(config: PagemapConfig) -> int:
    from pagemap.catalog import RouteCatalog
    from pagemap.watcher import PagesWatcher

    catalog = RouteCatalog(config)
    await catalog.rebuild()
    print(f"  {format_summary(catalog)} ({config.pages_path})", file=sys.stderr)

    def report(updated: RouteCatalog) -> None:
        print(f"  Routes updated: {format_summary(updated)}", file=sys.stderr)

    watcher = PagesWatcher(config)
    watcher.start()
    try:
        await catalog.follow(watcher, on_update=report)
    finally:
        watcher.stop()
        catalog.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pagemap._errors import PagemapError
    from pagemap.config_loader import load_config

    try:
        config = load_config(Path(args.root), pages_dir=args.pages_dir)
    except PagemapError as exc:
        print(f"  Config error: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.command == "routes":
        sys.exit(asyncio.run(_routes(config, args.format, args.name)))
    elif args.command == "watch":
        try:
            sys.exit(asyncio.run(_watch(config)))
        except KeyboardInterrupt:
            sys.exit(0)


if __name__ == "__main__":
    main()
