"""Parser for scraped menus where every page element holds one dish."""

from __future__ import annotations

import logging

from menumap.ingestion.adapters.base import ParserProfile
from menumap.ingestion.models import PRICE_UNKNOWN, CandidateEntry, Item, RawDocument
from menumap.ingestion.normalization import normalize_menu_text, normalize_whitespace

logger = logging.getLogger(__name__)


class BlockParser:
    """Accept element blocks with an exact line count.

    Two lines are name and ingredients with an unknown price; three lines add
    the price. A block containing a stop marker ends its section; later
    sections are still read.
    """

    def __init__(
        self,
        profile: ParserProfile,
        *,
        line_counts: tuple[int, ...] = (3,),
        stop_markers: tuple[str, ...] = (),
        drop_blank_lines: bool = False,
    ) -> None:
        invalid = [count for count in line_counts if count not in (2, 3)]
        if not line_counts or invalid:
            raise ValueError(f"line_counts must be drawn from (2, 3), got {line_counts!r}")
        self._profile = profile
        self._line_counts = line_counts
        self._stop_markers = stop_markers
        self._drop_blank_lines = drop_blank_lines

    @property
    def restaurant(self) -> str:
        return self._profile.restaurant

    def segment(self, document: RawDocument) -> list[CandidateEntry]:
        entries: list[CandidateEntry] = []
        for section_index, section in enumerate(document.sections):
            for position, block in enumerate(section):
                if any(marker in block for marker in self._stop_markers):
                    logger.debug(
                        "Stop marker in section %d of %s; ignoring %d remaining blocks",
                        section_index,
                        self.restaurant,
                        len(section) - position,
                    )
                    break
                text = normalize_menu_text(block).strip()
                if text and self._profile.admits(text):
                    entries.append(CandidateEntry(text=text, source=self.restaurant))
        return entries

    def _lines(self, text: str) -> list[str]:
        lines = [normalize_whitespace(line) for line in text.split("\n")]
        if self._drop_blank_lines:
            lines = [line for line in lines if any(char.isalnum() for char in line)]
        return lines

    def extract_item(self, entry: CandidateEntry, *, updated: str) -> Item | None:
        lines = self._lines(entry.text)
        if len(lines) not in self._line_counts or not lines[0]:
            return None

        ingredients = tuple(piece.strip() for piece in lines[1].split(",") if piece.strip())
        price = lines[2] if len(lines) == 3 and lines[2] else PRICE_UNKNOWN
        return Item(
            name=lines[0],
            ingredients=ingredients,
            price=price,
            restaurant=self.restaurant,
            updated=updated,
        )

    def parse(self, document: RawDocument, *, updated: str) -> list[Item]:
        items = [self.extract_item(entry, updated=updated) for entry in self.segment(document)]
        return [item for item in items if item is not None]
