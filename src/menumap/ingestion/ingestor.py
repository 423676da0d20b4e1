"""Routing entrypoint pairing extraction sources with menu parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import logging
import time

from menumap.ingestion.adapters.base import MenuParser
from menumap.ingestion.errors import ExtractionError
from menumap.ingestion.models import Item
from menumap.ingestion.sources import MenuSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestionResult:
    """Items produced by one source, or the error that stopped it."""

    name: str
    restaurant: str
    items: list[Item] = field(default_factory=list)
    error: ExtractionError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class IngestionRunStats:
    scanned: int = 0
    ingested: int = 0
    items: int = 0
    errors: int = 0
    duration_ms: int = 0
    error_details: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, int | list[dict[str, str]]]:
        return {
            "scanned": self.scanned,
            "ingested": self.ingested,
            "items": self.items,
            "errors": self.errors,
            "duration_ms": self.duration_ms,
            "error_details": self.error_details,
        }


@dataclass(slots=True)
class _Registration:
    source: MenuSource
    parser: MenuParser


class MenuIngestor:
    """Run registered sources through their parsers, one source at a time.

    A failing source is recorded and contributes no items; the others still run.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, _Registration] = {}

    @property
    def source_names(self) -> list[str]:
        return list(self._registrations)

    def register(self, name: str, source: MenuSource, parser: MenuParser) -> None:
        """Register a source/parser pair by key."""

        if not name:
            raise ValueError("Source name cannot be empty")
        self._registrations[name] = _Registration(source=source, parser=parser)

    def ingest(self, name: str, *, updated: str | None = None) -> IngestionResult:
        """Extract and parse one registered source."""

        try:
            registration = self._registrations[name]
        except KeyError:
            raise ValueError(f"No source registered under {name!r}") from None

        parser = registration.parser
        stamp = updated or date.today().isoformat()
        try:
            document = registration.source.fetch()
        except ExtractionError as exc:
            logger.error("Extraction failed for %s: %s", name, exc)
            return IngestionResult(name=name, restaurant=parser.restaurant, error=exc)

        try:
            items = parser.parse(document, updated=stamp)
        except Exception as exc:
            error = ExtractionError(document.source, f"Parser failed: {exc}")
            logger.exception("Parsing failed for %s", name)
            return IngestionResult(name=name, restaurant=parser.restaurant, error=error)

        logger.info("Parsed %d items for %s from %s", len(items), parser.restaurant, document.source)
        return IngestionResult(name=name, restaurant=parser.restaurant, items=items)

    def ingest_all(
        self,
        *,
        names: list[str] | None = None,
        updated: str | None = None,
    ) -> tuple[list[IngestionResult], IngestionRunStats]:
        """Run the named sources (default: all) and collect per-source outcomes."""

        selected = list(self._registrations) if names is None else names
        unknown = [name for name in selected if name not in self._registrations]
        if unknown:
            raise ValueError(f"No source registered under {', '.join(map(repr, unknown))}")

        started = time.perf_counter()
        stats = IngestionRunStats(scanned=len(selected))
        results: list[IngestionResult] = []

        for name in selected:
            result = self.ingest(name, updated=updated)
            results.append(result)
            if result.error is not None:
                stats.errors += 1
                stats.error_details.append({"source": name, "error": str(result.error)})
                continue
            stats.ingested += 1
            stats.items += len(result.items)

        stats.duration_ms = int((time.perf_counter() - started) * 1000)
        return results, stats
