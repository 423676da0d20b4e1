"""Item store, inverted index and keyword query engine."""

from .indexer import InvertedIndex, build_index, tokenize_item
from .query import query_index, query_tokens
from .repository import MenuRepository

__all__ = [
    "InvertedIndex",
    "MenuRepository",
    "build_index",
    "query_index",
    "query_tokens",
    "tokenize_item",
]
