"""Shared type definitions for pagemap."""

from collections.abc import Callable, Mapping
from typing import Literal, TypeAlias

# Rendering mode carried by a route (``.client`` files set "client")
RouteMode: TypeAlias = Literal["client", "server", "all"]

# Scalar values allowed in page metadata
MetaValue: TypeAlias = str | int | float | bool | None

# Metadata mapping attached to a route
PageMeta: TypeAlias = dict[str, MetaValue]

# Source-metadata extractor: file contents -> metadata or None
MetaExtractor: TypeAlias = Callable[[str], Mapping[str, MetaValue] | None]
