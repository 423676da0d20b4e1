"""Identity-hash canonicalization against the item store."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Iterable

from menumap.ingestion.batches import read_batch
from menumap.ingestion.errors import MalformedRecordError
from menumap.ingestion.models import Item
from menumap.search.repository import MenuRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DedupeStats:
    """Outcome of canonicalizing one batch of candidate items."""

    received: int = 0
    inserted: int = 0
    duplicates: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"received": self.received, "inserted": self.inserted, "duplicates": self.duplicates}


@dataclass(slots=True)
class LoadRunStats:
    scanned: int = 0
    loaded: int = 0
    inserted: int = 0
    duplicates: int = 0
    errors: int = 0
    error_details: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, int | list[dict[str, str]]]:
        return {
            "scanned": self.scanned,
            "loaded": self.loaded,
            "inserted": self.inserted,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "error_details": self.error_details,
        }


def canonicalize(items: Iterable[Item], repository: MenuRepository) -> DedupeStats:
    """Persist items by identity hash; an existing identity keeps its first-written values."""

    batch = list(items)
    inserted = repository.insert_if_absent(batch)
    stats = DedupeStats(received=len(batch), inserted=inserted, duplicates=len(batch) - inserted)
    logger.info(
        "Canonicalized %d items: %d new, %d duplicate",
        stats.received,
        stats.inserted,
        stats.duplicates,
    )
    return stats


def load_batches(paths: Iterable[str | Path], repository: MenuRepository) -> LoadRunStats:
    """Load JSON batch files one by one; a malformed file is skipped and reported."""

    stats = LoadRunStats()
    for path in paths:
        stats.scanned += 1
        try:
            items = read_batch(path)
        except MalformedRecordError as exc:
            logger.error("Skipping batch: %s", exc)
            stats.errors += 1
            stats.error_details.append({"source_path": str(path), "error": str(exc)})
            continue

        result = canonicalize(items, repository)
        stats.loaded += 1
        stats.inserted += result.inserted
        stats.duplicates += result.duplicates
    return stats
