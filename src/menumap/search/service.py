"""Published index snapshot with locked search and rebuild paths."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from menumap.ingestion.dedupe import DedupeStats, LoadRunStats, canonicalize, load_batches
from menumap.ingestion.models import Item
from menumap.search.indexer import InvertedIndex, build_index
from menumap.search.locking import ReadWriteLock
from menumap.search.query import query_index
from menumap.search.repository import MenuRepository

logger = logging.getLogger(__name__)


class MenuSearchService:
    """Serve keyword lookups against the current index snapshot.

    Searches take the lock shared. Ingestion and rebuild take it exclusive,
    build a fresh index from the whole store and swap it in; if the rebuild
    fails the previous snapshot stays published.
    """

    def __init__(self, repository: MenuRepository, *, index: InvertedIndex | None = None) -> None:
        self._repository = repository
        self._lock = ReadWriteLock()
        self._index = index if index is not None else InvertedIndex()

    @classmethod
    def from_db_path(cls, db_path: str | Path) -> "MenuSearchService":
        service = cls(MenuRepository(db_path))
        try:
            service.rebuild()
        except Exception:
            service.close()
            raise
        return service

    @property
    def repository(self) -> MenuRepository:
        return self._repository

    @property
    def index(self) -> InvertedIndex:
        with self._lock.read():
            return self._index

    def close(self) -> None:
        self._repository.close()

    def __enter__(self) -> "MenuSearchService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def search(self, text: str) -> list[Item]:
        with self._lock.read():
            return query_index(text, self._index)

    def rebuild(self) -> InvertedIndex:
        with self._lock.write():
            return self._rebuild_locked()

    def ingest_items(self, items: Iterable[Item]) -> DedupeStats:
        with self._lock.write():
            stats = canonicalize(items, self._repository)
            self._rebuild_locked()
        return stats

    def load_batch_files(self, paths: Iterable[str | Path]) -> LoadRunStats:
        with self._lock.write():
            stats = load_batches(paths, self._repository)
            self._rebuild_locked()
        return stats

    def _rebuild_locked(self) -> InvertedIndex:
        index = build_index(self._repository.iter_items())
        self._index = index
        logger.info("Published index with %d items", len(index))
        return index
