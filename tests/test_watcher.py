"""Tests for pagemap.watcher: page change detection."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from watchfiles import Change

from pagemap.config import PagemapConfig
from pagemap.watcher import _CHANGE_KIND_MAP, ChangeEvent, PagesWatcher, is_page_change


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> PagemapConfig:
    """A PagemapConfig rooted at a temp directory."""
    return PagemapConfig(root=tmp_path)


# ---------------------------------------------------------------------------
# ChangeEvent dataclass tests
# ---------------------------------------------------------------------------


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/pages/a.vue"), kind="modified")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality(self) -> None:
        a = ChangeEvent(path=Path("/a.vue"), kind="modified")
        b = ChangeEvent(path=Path("/a.vue"), kind="modified")
        assert a == b

    def test_hashable(self) -> None:
        event = ChangeEvent(path=Path("/a.vue"), kind="created")
        assert isinstance(hash(event), int)


class TestChangeKindMap:
    def test_all_changes_mapped(self) -> None:
        assert _CHANGE_KIND_MAP[Change.added] == "created"
        assert _CHANGE_KIND_MAP[Change.modified] == "modified"
        assert _CHANGE_KIND_MAP[Change.deleted] == "deleted"


# ---------------------------------------------------------------------------
# is_page_change tests
# ---------------------------------------------------------------------------


class TestIsPageChange:
    """Unit tests for is_page_change()."""

    def test_vue_page(self, config: PagemapConfig) -> None:
        assert is_page_change(config.root / "pages" / "index.vue", config)

    def test_nested_page(self, config: PagemapConfig) -> None:
        assert is_page_change(config.root / "pages" / "users" / "[id].ts", config)

    def test_outside_pages(self, config: PagemapConfig) -> None:
        assert not is_page_change(config.root / "components" / "Nav.vue", config)

    def test_wrong_extension(self, config: PagemapConfig) -> None:
        assert not is_page_change(config.root / "pages" / "notes.md", config)

    def test_hidden_file(self, config: PagemapConfig) -> None:
        assert not is_page_change(config.root / "pages" / ".draft.vue", config)

    def test_hidden_directory(self, config: PagemapConfig) -> None:
        assert not is_page_change(config.root / "pages" / ".cache" / "a.vue", config)

    def test_pages_dir_itself(self, config: PagemapConfig) -> None:
        assert not is_page_change(config.pages_path, config)

    def test_custom_pages_dir_and_extensions(self, tmp_path: Path) -> None:
        config = PagemapConfig(root=tmp_path, pages_dir="views", extensions=("tsx",))
        assert is_page_change(tmp_path / "views" / "home.tsx", config)
        assert not is_page_change(tmp_path / "views" / "home.vue", config)
        assert not is_page_change(tmp_path / "pages" / "home.tsx", config)


# ---------------------------------------------------------------------------
# PagesWatcher lifecycle
# ---------------------------------------------------------------------------


class TestPagesWatcher:
    """Start/stop without touching the filesystem."""

    def test_not_running_initially(self, config: PagemapConfig) -> None:
        assert not PagesWatcher(config).is_running

    def test_stop_without_start(self, config: PagemapConfig) -> None:
        watcher = PagesWatcher(config)
        watcher.stop()
        assert not watcher.is_running

    @pytest.mark.asyncio
    async def test_changes_ends_when_stopped(self, config: PagemapConfig) -> None:
        watcher = PagesWatcher(config)
        events = [event async for event in watcher.changes()]
        assert events == []

    @pytest.mark.asyncio
    async def test_emit_reaches_queue(self, config: PagemapConfig) -> None:
        watcher = PagesWatcher(config)
        watcher._loop = asyncio.get_running_loop()
        event = ChangeEvent(path=config.pages_path / "a.vue", kind="created")
        watcher._emit(event)
        await asyncio.sleep(0)
        assert [e async for e in watcher.changes()] == [event]
