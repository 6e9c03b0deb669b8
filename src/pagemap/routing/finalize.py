"""Route post-processing: name normalization, suppression, flattening.

Runs over the tree the builder produced, parent before children:

    users/index   -> users
    users/id      -> users-id
    index         -> (no name)

A route with a direct child whose path is empty hands its name to that
child (the child *is* its index page), so the layout and its index never
share a name.
"""

from __future__ import annotations

from collections.abc import Iterable

from pagemap.routing.context import ResolveContext
from pagemap.routing.tree import INDEX_PAGE_RE, Route

_INDEX_NAME = "index"


def normalize_route_name(name: str) -> str | None:
    """Drop a trailing ``index`` and dash-join the rest.

    Returns *None* when nothing is left (the root index page).
    """
    name = INDEX_PAGE_RE.sub("", name)
    if name == _INDEX_NAME:
        name = ""
    name = name.replace("/", "-")
    return name or None


def finalize_routes(
    routes: list[Route],
    context: ResolveContext | None = None,
    *,
    parent: Route | None = None,
) -> list[Route]:
    """Normalize *routes* and their descendants in place.

    Name collisions are reported through *context* and otherwise
    tolerated: both routes keep the name.

    Args:
        routes: Sibling routes to process.
        context: Pass context holding the name registry.
        parent: The routes' parent, *None* for roots.

    Returns:
        The same list, for chaining.

    """
    if context is None:
        context = ResolveContext()

    for route in routes:
        if route.name:
            route.name = normalize_route_name(route.name)
            context.check_name(route)

        # Children are relative to their parent
        if parent is not None and route.path.startswith("/"):
            route.path = route.path[1:]

        if route.children:
            finalize_routes(route.children, context, parent=route)

        if any(child.path == "" for child in route.children):
            route.name = None

        context.register_name(route)

    return routes


def unique_by_path(routes: Iterable[Route]) -> list[Route]:
    """Keep the first route for each distinct path."""
    seen: set[str] = set()
    unique: list[Route] = []
    for route in routes:
        if route.path in seen:
            continue
        seen.add(route.path)
        unique.append(route)
    return unique


def flatten_routes(routes: Iterable[Route]) -> list[Route]:
    """Flatten the tree, children before their parent.

    ``children`` references are kept on every route.  Building a
    name -> route mapping by overwriting in this order leaves the
    shallowest route in place for duplicate names.

    """
    flat: list[Route] = []
    for route in routes:
        flat.extend(flatten_routes(route.children))
        flat.append(route)
    return flat


def find_route_by_name(name: str, routes: Iterable[Route]) -> Route | None:
    """Depth-first search for a route called *name*; *None* if absent."""
    for route in routes:
        if route.name == name:
            return route
        found = find_route_by_name(name, route.children)
        if found is not None:
            return found
    return None
