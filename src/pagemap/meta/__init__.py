"""Page metadata: ``definePageMeta`` extraction and route augmentation."""

from pagemap.meta.augment import augment_routes, read_route_meta
from pagemap.meta.extractor import (
    DEFAULT_MACRO,
    extract_page_meta,
    find_script_region,
    parse_page_meta,
)

__all__ = [
    "DEFAULT_MACRO",
    "augment_routes",
    "extract_page_meta",
    "find_script_region",
    "parse_page_meta",
    "read_route_meta",
]
