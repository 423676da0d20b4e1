"""Keyword query tokenization and matching over an inverted index."""

from __future__ import annotations

from menumap.ingestion.models import Item
from menumap.search.indexer import InvertedIndex


def query_tokens(text: str) -> list[str]:
    """Keep letters and whitespace only, then split into lowercase tokens."""

    kept = "".join(char for char in text if char.isalpha() or char.isspace())
    return kept.lower().split()


def query_index(text: str, index: InvertedIndex) -> list[Item]:
    """Return the union of items matching any query token, each item once.

    No tokens or no matches yields an empty list. Results follow index order.
    """

    matched: set[int] = set()
    for token in query_tokens(text):
        matched |= index.lookup(token)
    if not matched:
        return []
    return [item for key, item in index.items.items() if key in matched]
