"""Name, ingredient and price extraction shared by the PDF menu parsers."""

from __future__ import annotations

from dataclasses import dataclass
import re

from menumap.ingestion.models import PRICE_ZERO

_TRAILING_PRICE_RE = re.compile(r"[0-9]+$")
_BORDER_RE = re.compile(r"^[\W_]+|[\W_]+$")
_ASCII_DIGITS = frozenset("0123456789")


@dataclass(slots=True)
class ExtractedFields:
    name: str
    ingredients: list[str]
    price: str


def _is_split_char(char: str) -> bool:
    if char in _ASCII_DIGITS:
        return True
    return not (char.isalnum() or char.isspace() or char == "&")


def find_split_index(text: str) -> int | None:
    """Return the index where the dish name ends, or None when nothing follows it."""

    for index, char in enumerate(text):
        if _is_split_char(char):
            return index
    return None


def trim_border(piece: str) -> str:
    """Strip non-alphanumeric characters from both ends."""

    return _BORDER_RE.sub("", piece)


def split_ingredients(details: str) -> list[str]:
    conjoined = details.replace(" and ", ", ")
    pieces = (trim_border(piece) for piece in conjoined.split(","))
    return [piece for piece in pieces if piece]


def extract_fields(text: str) -> ExtractedFields | None:
    """Split one entry into name, ingredients and price.

    Returns None when the entry has no name/details boundary or the name is
    empty; callers drop those entries.
    """

    split_at = find_split_index(text)
    if split_at is None:
        return None

    name = text[:split_at].strip()
    if not name:
        return None

    ingredients = split_ingredients(text[split_at:])
    price = PRICE_ZERO
    if ingredients:
        last = ingredients.pop()
        match = _TRAILING_PRICE_RE.search(last)
        if match is None:
            ingredients.append(last)
        else:
            price = match.group(0)
            remainder = last[: match.start()].strip()
            if remainder:
                ingredients.append(remainder)

    return ExtractedFields(name=name, ingredients=ingredients, price=price)
