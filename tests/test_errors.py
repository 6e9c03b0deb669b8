"""Tests for pagemap._errors."""

import pytest

from pagemap._errors import (
    ConfigError,
    EmptyParameterError,
    EnumerationError,
    MalformedSegmentError,
    MetadataParseError,
    PagemapError,
    UnterminatedParameterError,
)


class TestErrorHierarchy:
    """All pagemap errors inherit from PagemapError."""

    def test_pagemap_error_is_exception(self) -> None:
        assert issubclass(PagemapError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, PagemapError)

    def test_segment_errors_inherit(self) -> None:
        assert issubclass(UnterminatedParameterError, MalformedSegmentError)
        assert issubclass(EmptyParameterError, MalformedSegmentError)
        assert issubclass(MalformedSegmentError, PagemapError)

    def test_metadata_error_inherits(self) -> None:
        assert issubclass(MetadataParseError, PagemapError)

    def test_enumeration_error_inherits(self) -> None:
        assert issubclass(EnumerationError, PagemapError)

    def test_segment_attribute(self) -> None:
        exc = EmptyParameterError("Empty param", "[]")
        assert exc.segment == "[]"
        assert str(exc) == "Empty param"

    def test_catch_all_pagemap_errors(self) -> None:
        with pytest.raises(PagemapError):
            raise UnterminatedParameterError("Unfinished param", "[id")
