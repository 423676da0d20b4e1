"""Inverted token index built once over the full item set."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from menumap.ingestion.models import Item

logger = logging.getLogger(__name__)


def normalize_token(word: str) -> str:
    """Keep alphanumeric characters only, lowercased."""

    return "".join(char for char in word if char.isalnum()).lower()


def tokenize_item(item: Item) -> list[str]:
    """Index tokens for an item's name and every ingredient."""

    words = item.name.split()
    for ingredient in item.ingredients:
        words.extend(ingredient.split())
    tokens = (normalize_token(word) for word in words)
    return [token for token in tokens if token]


@dataclass(frozen=True, slots=True)
class InvertedIndex:
    """Immutable snapshot: token -> identity hashes, plus the items by hash.

    Buckets hold identity hashes only, so an item listed under many tokens
    is stored once in ``items``.
    """

    items: Mapping[int, Item] = field(default_factory=dict)
    postings: Mapping[str, frozenset[int]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.items)

    def lookup(self, token: str) -> frozenset[int]:
        return self.postings.get(token, frozenset())

    @property
    def tokens(self) -> list[str]:
        return list(self.postings)


def build_index(items: Iterable[Item]) -> InvertedIndex:
    arena: dict[int, Item] = {}
    buckets: dict[str, set[int]] = {}

    for item in items:
        key = item.identity_hash
        arena.setdefault(key, item)
        for token in tokenize_item(item):
            buckets.setdefault(token, set()).add(key)

    logger.info("Built index: %d items, %d tokens", len(arena), len(buckets))
    return InvertedIndex(
        items=MappingProxyType(arena),
        postings=MappingProxyType({token: frozenset(keys) for token, keys in buckets.items()}),
    )
