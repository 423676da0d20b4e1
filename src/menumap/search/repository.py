"""Repository primitives for the insert-if-absent item store."""

from __future__ import annotations

import json
from pathlib import Path
import sqlite3
from typing import Iterable

from menumap.ingestion.models import Item
from menumap.search.schema import ITEMS_TABLE, apply_runtime_pragmas, ensure_schema


class MenuRepository:
    """Thin transactional layer over the SQLite item table.

    Rows are never updated: a second write for an existing identity hash is
    ignored, so the first-seen price and date are kept.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        if str(self._db_path) != ":memory:":
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        self.created = ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "MenuRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def insert_if_absent(self, items: Iterable[Item]) -> int:
        """Insert items keyed by identity hash; return how many rows were new."""

        rows = [(item.identity_hash, json.dumps(item.to_dict(), ensure_ascii=False)) for item in items]
        if not rows:
            return 0

        with self._connection:
            before = self._connection.total_changes
            self._connection.executemany(
                f"""
                INSERT INTO {ITEMS_TABLE}(id, item_data)
                VALUES(?, ?)
                ON CONFLICT(id) DO NOTHING
                """,
                rows,
            )
            return self._connection.total_changes - before

    def contains(self, identity_hash: int) -> bool:
        row = self._connection.execute(
            f"SELECT 1 FROM {ITEMS_TABLE} WHERE id = ?",
            (identity_hash,),
        ).fetchone()
        return row is not None

    def count(self) -> int:
        row = self._connection.execute(f"SELECT COUNT(*) AS c FROM {ITEMS_TABLE}").fetchone()
        return int(row["c"])

    def iter_items(self) -> list[Item]:
        rows = self._connection.execute(
            f"SELECT id, item_data FROM {ITEMS_TABLE} ORDER BY id ASC"
        ).fetchall()
        return [Item.from_dict(json.loads(row["item_data"])) for row in rows]
