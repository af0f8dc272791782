"""Split response text into plain runs and item references."""

from __future__ import annotations

import re
from typing import Iterator, Union

from osrs_oracle.domain.models import ItemReference

# Exactly two fields; brackets, pipes and newlines are not allowed inside either.
ITEM_PATTERN = re.compile(r"\[\[([^\[\]|\n]+)\|([^\[\]|\n]*)\]\]")

WIKI_IMAGE_BASE = "https://oldschool.runescape.wiki/images"
LOOKUP_PLACEHOLDER = "_"

Segment = Union[str, ItemReference]


class MarkupSegments:
    """Lazy view over the segments of ``text``; iterating again starts over."""

    def __init__(self, text: str):
        self.text = text or ""

    def __iter__(self) -> Iterator[Segment]:
        cursor = 0
        for match in ITEM_PATTERN.finditer(self.text):
            if match.start() > cursor:
                yield self.text[cursor : match.start()]
            yield ItemReference(display_name=match.group(1), short_info=match.group(2))
            cursor = match.end()
        if cursor < len(self.text):
            yield self.text[cursor:]

    def references(self) -> list[ItemReference]:
        return [seg for seg in self if isinstance(seg, ItemReference)]


def parse_segments(text: str) -> MarkupSegments:
    return MarkupSegments(text)


def strip_markup(text: str) -> str:
    """Replace every item reference with its bare name (used before speech)."""
    return ITEM_PATTERN.sub(lambda m: m.group(1), text or "")


def wiki_lookup_key(name: str) -> str:
    return name.strip().replace(" ", LOOKUP_PLACEHOLDER)


def wiki_image_url(name: str) -> str:
    # Best effort: the wiki redirects most case differences, punctuation is left alone.
    return f"{WIKI_IMAGE_BASE}/{wiki_lookup_key(name)}.png"


__all__ = [
    "ITEM_PATTERN",
    "MarkupSegments",
    "Segment",
    "parse_segments",
    "strip_markup",
    "wiki_lookup_key",
    "wiki_image_url",
]
