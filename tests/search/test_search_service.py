from __future__ import annotations

from pathlib import Path

import pytest

from menumap.ingestion.batches import write_batch
from menumap.ingestion.models import Item
from menumap.search.repository import MenuRepository
from menumap.search.service import MenuSearchService


def _duck(price: str = "32") -> Item:
    return Item(name="Duck Breast", ingredients=("cherry", "thyme"), price=price, restaurant="Lark", updated="2024-06-03")


def _service(tmp_path: Path) -> MenuSearchService:
    return MenuSearchService(MenuRepository(tmp_path / "menu.db"))


def test_ingest_publishes_new_index(tmp_path: Path) -> None:
    with _service(tmp_path) as service:
        assert service.search("duck") == []

        stats = service.ingest_items([_duck()])

        assert stats.inserted == 1
        assert [item.name for item in service.search("cherry")] == ["Duck Breast"]
        assert len(service.index) == 1


def test_reingest_keeps_first_written_price(tmp_path: Path) -> None:
    with _service(tmp_path) as service:
        service.ingest_items([_duck("32")])
        service.ingest_items([_duck("40")])

        results = service.search("duck")
        assert len(results) == 1
        assert results[0].price == "32"


def test_from_db_path_builds_index_from_existing_store(tmp_path: Path) -> None:
    db_path = tmp_path / "menu.db"
    with MenuRepository(db_path) as repository:
        repository.insert_if_absent([_duck()])

    with MenuSearchService.from_db_path(db_path) as service:
        assert [item.name for item in service.search("thyme")] == ["Duck Breast"]


def test_load_batch_files_skips_malformed_and_rebuilds(tmp_path: Path) -> None:
    good = write_batch([_duck()], tmp_path / "lark_06-03.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    with _service(tmp_path) as service:
        stats = service.load_batch_files([good, broken])

        assert stats.loaded == 1
        assert stats.errors == 1
        assert [item.name for item in service.search("duck")] == ["Duck Breast"]


def test_failed_rebuild_keeps_published_index(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _service(tmp_path) as service:
        service.ingest_items([_duck()])
        published = service.index

        def _broken_iter() -> list[Item]:
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(service.repository, "iter_items", _broken_iter)
        with pytest.raises(RuntimeError, match="store unavailable"):
            service.rebuild()

        assert service.index is published
        assert [item.name for item in service.search("duck")] == ["Duck Breast"]


def test_from_db_path_closes_store_when_first_build_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "menu.db"
    with MenuRepository(db_path) as repository:
        repository.connection.execute("INSERT INTO menu_items(id, item_data) VALUES(1, '{}')")
        repository.connection.commit()

    closed: list[Path] = []
    original_close = MenuRepository.close

    def recording_close(self: MenuRepository) -> None:
        closed.append(self.db_path)
        original_close(self)

    monkeypatch.setattr(MenuRepository, "close", recording_close)

    with pytest.raises(ValueError, match="missing fields"):
        MenuSearchService.from_db_path(db_path)

    assert closed == [db_path]
