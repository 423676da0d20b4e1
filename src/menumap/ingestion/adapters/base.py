"""Shared parser contract for per-source menu segmentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from menumap.ingestion.extraction import ExtractedFields
from menumap.ingestion.models import CandidateEntry, Item, RawDocument


@dataclass(frozen=True, slots=True)
class ParserProfile:
    """Per-source admission rules.

    ``denylist`` holds substrings marking a line as a header or notice rather
    than a dish.
    """

    restaurant: str
    denylist: tuple[str, ...] = ()
    require_lowercase: bool = False
    require_digit: bool = False
    min_length: int = 0

    def is_excluded(self, text: str) -> bool:
        return any(marker in text for marker in self.denylist)

    def admits(self, text: str) -> bool:
        if len(text) < self.min_length:
            return False
        if self.require_lowercase and not any(char.islower() for char in text):
            return False
        if self.require_digit and not any(char in "0123456789" for char in text):
            return False
        return not self.is_excluded(text)


@runtime_checkable
class MenuParser(Protocol):
    """Protocol that every menu format parser must implement."""

    @property
    def restaurant(self) -> str:
        """Source identifier stamped on every produced item."""

    def segment(self, document: RawDocument) -> list[CandidateEntry]:
        """Split normalized source text into candidate entries."""

    def extract_item(self, entry: CandidateEntry, *, updated: str) -> Item | None:
        """Turn one candidate into an item, or None when it is not a dish."""

    def parse(self, document: RawDocument, *, updated: str) -> list[Item]:
        """Segment and extract a whole document."""


def item_from_fields(fields: ExtractedFields, *, restaurant: str, updated: str) -> Item:
    return Item(
        name=fields.name,
        ingredients=tuple(fields.ingredients),
        price=fields.price,
        restaurant=restaurant,
        updated=updated,
    )
