"""Canonical data structures shared by all menu parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
import hashlib
from typing import Any, Mapping

PRICE_ZERO = "0"
PRICE_UNKNOWN = "n/a"

_WIRE_FIELDS = ("item_name", "ingredients", "updated", "price", "restaurant")


def _identity_hash(name: str, ingredients: tuple[str, ...], restaurant: str) -> int:
    digest = hashlib.sha256()
    for part in (name, *ingredients, restaurant):
        encoded = part.encode("utf-8")
        digest.update(len(encoded).to_bytes(8, "big"))
        digest.update(encoded)
    # Field count keeps ("a", ()) and ("", ("a",)) apart.
    digest.update(len(ingredients).to_bytes(8, "big"))
    unsigned = int.from_bytes(digest.digest()[:8], "big")
    # SQLite INTEGER is signed 64-bit.
    return unsigned - (1 << 64) if unsigned >= (1 << 63) else unsigned


@dataclass(frozen=True, slots=True, eq=False)
class Item:
    """One canonical menu entry.

    Equality and hashing follow the identity key ``(name, ingredients,
    restaurant)``. ``price`` and ``updated`` are informational and do not
    participate, so a re-ingested dish with a new price is the same item.
    """

    name: str
    ingredients: tuple[str, ...] = ()
    price: str = PRICE_ZERO
    restaurant: str = ""
    updated: str = ""

    @property
    def identity_hash(self) -> int:
        return _identity_hash(self.name, self.ingredients, self.restaurant)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return (self.name, self.ingredients, self.restaurant) == (
            other.name,
            other.ingredients,
            other.restaurant,
        )

    def __hash__(self) -> int:
        return self.identity_hash

    def __str__(self) -> str:
        return f"{self.name}: {list(self.ingredients)}, {self.price}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_name": self.name,
            "ingredients": list(self.ingredients),
            "updated": self.updated,
            "price": self.price,
            "restaurant": self.restaurant,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Item":
        missing = [name for name in _WIRE_FIELDS if name not in payload]
        if missing:
            raise ValueError(f"Item record missing fields: {', '.join(missing)}")

        ingredients = payload["ingredients"]
        if not isinstance(ingredients, list) or not all(isinstance(value, str) for value in ingredients):
            raise ValueError("Item field 'ingredients' must be a list of strings")
        for name in ("item_name", "updated", "price", "restaurant"):
            if not isinstance(payload[name], str):
                raise ValueError(f"Item field '{name}' must be a string")
        if not payload["item_name"]:
            raise ValueError("Item field 'item_name' cannot be empty")

        return cls(
            name=payload["item_name"],
            ingredients=tuple(ingredients),
            price=payload["price"],
            restaurant=payload["restaurant"],
            updated=payload["updated"],
        )


@dataclass(slots=True)
class CandidateEntry:
    """A segmented chunk of menu text awaiting field extraction."""

    text: str
    source: str


@dataclass(slots=True)
class RawDocument:
    """Text handed over by an extraction source.

    PDF and text sources fill ``text``. Scraped pages fill ``sections``: one
    list per page container, holding one string per matched element.
    """

    source: str
    text: str = ""
    sections: list[list[str]] = field(default_factory=list)

    @property
    def blocks(self) -> list[str]:
        return [block for section in self.sections for block in section]
