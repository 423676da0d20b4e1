from __future__ import annotations

from pathlib import Path

from menumap.ingestion.models import Item
from menumap.search.repository import MenuRepository


def _item(name: str) -> Item:
    return Item(name=name, ingredients=("salt",), price="5", restaurant="Bateau", updated="2024-04-11")


def test_schema_is_created_once(tmp_path: Path) -> None:
    db_path = tmp_path / "nested" / "menu.db"

    with MenuRepository(db_path) as repository:
        assert repository.created is True
        assert repository.count() == 0

    with MenuRepository(db_path) as repository:
        assert repository.created is False


def test_rows_are_keyed_by_signed_identity_hash(tmp_path: Path) -> None:
    item = _item("Fries")

    with MenuRepository(tmp_path / "menu.db") as repository:
        assert repository.insert_if_absent([item]) == 1

        row = repository.connection.execute("SELECT id FROM menu_items").fetchone()
        assert row is not None
        assert int(row["id"]) == item.identity_hash
        assert repository.contains(item.identity_hash)


def test_items_persist_across_connections(tmp_path: Path) -> None:
    db_path = tmp_path / "menu.db"
    with MenuRepository(db_path) as repository:
        repository.insert_if_absent([_item("Fries"), _item("Soup")])

    with MenuRepository(db_path) as repository:
        names = sorted(item.name for item in repository.iter_items())

    assert names == ["Fries", "Soup"]


def test_empty_insert_is_a_no_op(tmp_path: Path) -> None:
    with MenuRepository(tmp_path / "menu.db") as repository:
        assert repository.insert_if_absent([]) == 0
