"""Shared test fixtures for pagemap."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import pytest

from pagemap.observability.collector import RouterCollector
from pagemap.observability.log import EventLog
from pagemap.routing.context import ResolveContext
from pagemap.routing.scanner import ScannedFile

# Minimal page body without any metadata declaration
PAGE_BODY = "<template><div /></template>\n"


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """Create an empty ``pages/`` directory under a temp project root."""
    pages = tmp_path / "pages"
    pages.mkdir()
    return pages


@pytest.fixture
def collector() -> RouterCollector:
    """A collector backed by a fresh event log."""
    return RouterCollector(EventLog())


@pytest.fixture
def context(collector: RouterCollector) -> ResolveContext:
    """A pass context that records events into ``collector``."""
    return ResolveContext(collector)


def write_pages(pages_dir: Path, files: Iterable[str] | Mapping[str, str]) -> None:
    """Write page files under ``pages_dir``.

    Accepts either relative paths (written with a placeholder body) or a
    mapping of relative path to file contents.
    """
    items = files.items() if isinstance(files, Mapping) else ((f, PAGE_BODY) for f in files)
    for relative, content in items:
        path = pages_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def scanned(*relative_paths: str, base: str = "/app/pages") -> list[ScannedFile]:
    """Build ScannedFile records without touching the filesystem."""
    return [
        ScannedFile(relative_path=rel, absolute_path=f"{base}/{rel}")
        for rel in relative_paths
    ]
