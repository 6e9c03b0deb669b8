"""Tests for pagemap package exports and metadata."""

import pytest

import pagemap


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(pagemap.__version__, str)
        assert "0.1.0" in pagemap.__version__

    def test_all_exports_resolvable(self) -> None:
        for name in pagemap.__all__:
            getattr(pagemap, name)

    def test_lazy_exports_are_the_real_objects(self) -> None:
        from pagemap.resolver import resolve_routes

        assert pagemap.resolve_routes is resolve_routes

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            pagemap.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
