"""Pagemap error hierarchy.

All pagemap-specific errors inherit from PagemapError for easy catching.
"""


class PagemapError(Exception):
    """Base error for all pagemap operations."""


class ConfigError(PagemapError):
    """Invalid or missing configuration."""


class MalformedSegmentError(PagemapError):
    """A path segment could not be tokenized.

    Fatal for the file that contains the segment only; the resolver skips
    that file and keeps going.

    """

    def __init__(self, message: str, segment: str) -> None:
        super().__init__(message)
        self.segment = segment


class UnterminatedParameterError(MalformedSegmentError):
    """A ``[param`` bracket was never closed."""


class EmptyParameterError(MalformedSegmentError):
    """A parameter or group closed with no name (``[]``, ``()``)."""


class MetadataParseError(PagemapError):
    """Page source could not be parsed while looking for metadata."""


class EnumerationError(PagemapError):
    """The pages directory could not be scanned."""
