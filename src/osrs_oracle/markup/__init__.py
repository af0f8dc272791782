"""Inline item-markup protocol: ``[[Item name|Short info]]``."""

from osrs_oracle.markup.parser import (
    ITEM_PATTERN,
    MarkupSegments,
    parse_segments,
    strip_markup,
    wiki_image_url,
    wiki_lookup_key,
)

__all__ = [
    "ITEM_PATTERN",
    "MarkupSegments",
    "parse_segments",
    "strip_markup",
    "wiki_image_url",
    "wiki_lookup_key",
]
