"""Parser for dense single-column PDF menus with no blank-line separators."""

from __future__ import annotations

import logging
import re

from menumap.ingestion.adapters.base import ParserProfile, item_from_fields
from menumap.ingestion.extraction import extract_fields
from menumap.ingestion.models import CandidateEntry, Item, RawDocument
from menumap.ingestion.normalization import normalize_menu_text

logger = logging.getLogger(__name__)

# A price runs straight into the next dish name, so whitespace after a digit
# is as good as a line break.
_BOUNDARY_RE = re.compile(r"\n|(?<=[0-9])\s")


class DigitBoundaryParser:
    """Split on newlines and on whitespace that follows a digit."""

    def __init__(self, profile: ParserProfile) -> None:
        self._profile = profile

    @property
    def restaurant(self) -> str:
        return self._profile.restaurant

    def segment(self, document: RawDocument) -> list[CandidateEntry]:
        text = normalize_menu_text(document.text)
        entries: list[CandidateEntry] = []
        for piece in _BOUNDARY_RE.split(text):
            candidate = piece.strip()
            if candidate and self._profile.admits(candidate):
                entries.append(CandidateEntry(text=candidate, source=self.restaurant))
        return entries

    def extract_item(self, entry: CandidateEntry, *, updated: str) -> Item | None:
        fields = extract_fields(entry.text)
        if fields is None:
            logger.debug("Dropped ambiguous entry from %s: %r", self.restaurant, entry.text)
            return None
        return item_from_fields(fields, restaurant=self.restaurant, updated=updated)

    def parse(self, document: RawDocument, *, updated: str) -> list[Item]:
        items = [self.extract_item(entry, updated=updated) for entry in self.segment(document)]
        return [item for item in items if item is not None]
