"""Parser for columnar PDF menus where one dish spans several lines."""

from __future__ import annotations

import logging
import re

from menumap.ingestion.adapters.base import ParserProfile, item_from_fields
from menumap.ingestion.extraction import extract_fields
from menumap.ingestion.models import CandidateEntry, Item, RawDocument
from menumap.ingestion.normalization import normalize_menu_text

logger = logging.getLogger(__name__)

DEFAULT_TERMINATOR = r"[0-9]+$"


class TerminatorParser:
    """Accumulate lines into a buffer until a terminator line closes the entry.

    A line rejected by the profile clears the buffer without emitting it.
    ``break_after`` tokens get a line break inserted after them first, for
    layouts that run a closing token into the next dish.
    """

    def __init__(
        self,
        profile: ParserProfile,
        *,
        terminator: str | re.Pattern[str] = DEFAULT_TERMINATOR,
        break_after: tuple[str, ...] = (),
    ) -> None:
        self._profile = profile
        self._terminator = re.compile(terminator) if isinstance(terminator, str) else terminator
        self._break_after = break_after

    @property
    def restaurant(self) -> str:
        return self._profile.restaurant

    def segment(self, document: RawDocument) -> list[CandidateEntry]:
        text = normalize_menu_text(document.text)
        for token in self._break_after:
            text = text.replace(token, token + "\n")

        entries: list[CandidateEntry] = []
        buffer: list[str] = []
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not self._profile.admits(line):
                buffer.clear()
                continue
            if not line:
                continue
            buffer.append(line)
            if self._terminator.search(line):
                entries.append(CandidateEntry(text=" ".join(buffer), source=self.restaurant))
                buffer.clear()

        if buffer:
            logger.debug("Discarded unterminated lines from %s: %r", self.restaurant, buffer)
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
