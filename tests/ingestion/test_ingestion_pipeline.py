from __future__ import annotations

from pathlib import Path

import pytest

from menumap.ingestion.adapters import build_default_parsers
from menumap.ingestion.errors import ExtractionError
from menumap.ingestion.ingestor import MenuIngestor
from menumap.ingestion.models import RawDocument
from menumap.ingestion.sources import TextFileSource
from menumap.search.repository import MenuRepository
from menumap.search.service import MenuSearchService


class _UnreachableSource:
    location = "https://canlis.example/menu"

    def fetch(self) -> RawDocument:
        raise ExtractionError(self.location, "automation endpoint unreachable")


class _BlockSource:
    location = "memory"

    def __init__(self, blocks: list[str]) -> None:
        self._blocks = blocks

    def fetch(self) -> RawDocument:
        return RawDocument(source=self.location, sections=[self._blocks])


class _ExplodingParser:
    restaurant = "Broken"

    def segment(self, document: RawDocument) -> list:
        raise RuntimeError("bad layout")

    def extract_item(self, entry, *, updated: str):
        return None

    def parse(self, document: RawDocument, *, updated: str) -> list:
        return self.segment(document)


def _bateau_file(tmp_path: Path) -> Path:
    path = tmp_path / "bateau.txt"
    path.write_text("Grilled Oysters, lemon, mignonette 16\nBeef Tartare, egg yolk, capers 22\n", encoding="utf-8")
    return path


def test_failing_source_does_not_block_other_sources(tmp_path: Path) -> None:
    parsers = build_default_parsers()
    ingestor = MenuIngestor()
    ingestor.register("bateau", TextFileSource(_bateau_file(tmp_path)), parsers["bateau"])
    ingestor.register("canlis", _UnreachableSource(), parsers["canlis"])
    ingestor.register("lark", _BlockSource(["Duck Breast\ncherry, thyme\n32"]), parsers["lark"])

    results, stats = ingestor.ingest_all(updated="2024-06-03")

    assert stats.scanned == 3
    assert stats.ingested == 2
    assert stats.errors == 1
    assert stats.items == 3
    assert stats.error_details[0]["source"] == "canlis"

    by_name = {result.name: result for result in results}
    assert by_name["canlis"].items == []
    assert isinstance(by_name["canlis"].error, ExtractionError)
    assert [item.name for item in by_name["bateau"].items] == ["Grilled Oysters", "Beef Tartare"]


def test_parser_crash_is_isolated_to_its_source(tmp_path: Path) -> None:
    ingestor = MenuIngestor()
    ingestor.register("broken", _BlockSource(["x"]), _ExplodingParser())
    ingestor.register("bateau", TextFileSource(_bateau_file(tmp_path)), build_default_parsers()["bateau"])

    results, stats = ingestor.ingest_all(updated="2024-06-03")

    assert stats.errors == 1
    assert "bad layout" in str(results[0].error)
    assert len(results[1].items) == 2


def test_items_from_healthy_sources_remain_searchable_after_a_failure(tmp_path: Path) -> None:
    parsers = build_default_parsers()
    ingestor = MenuIngestor()
    ingestor.register("lark", _BlockSource(["Duck Breast\ncherry, thyme\n32"]), parsers["lark"])
    ingestor.register("canlis", _UnreachableSource(), parsers["canlis"])

    with MenuSearchService(MenuRepository(tmp_path / "menu.db")) as service:
        first, _ = ingestor.ingest_all(names=["lark"], updated="2024-06-03")
        service.ingest_items(first[0].items)

        second, stats = ingestor.ingest_all(names=["canlis"], updated="2024-06-10")
        assert stats.errors == 1
        service.ingest_items(item for result in second for item in result.items)

        assert [item.name for item in service.search("duck")] == ["Duck Breast"]
        assert service.repository.count() == 1


def test_unknown_source_name_is_rejected() -> None:
    ingestor = MenuIngestor()

    with pytest.raises(ValueError, match="canlis"):
        ingestor.ingest("canlis")
    with pytest.raises(ValueError, match="lark"):
        ingestor.ingest_all(names=["lark"])
    with pytest.raises(ValueError, match="empty"):
        ingestor.register("", _UnreachableSource(), build_default_parsers()["lark"])
