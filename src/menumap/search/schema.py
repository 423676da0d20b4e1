"""SQLite schema and pragmas for the menu item store."""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

PRAGMA_BUSY_TIMEOUT_MS = 5000
ITEMS_TABLE = "menu_items"


def apply_runtime_pragmas(connection: sqlite3.Connection) -> None:
    """Apply runtime pragmas for concurrent readers and a single writer."""

    connection.execute("PRAGMA journal_mode=WAL;")
    connection.execute(f"PRAGMA busy_timeout={PRAGMA_BUSY_TIMEOUT_MS};")
    connection.execute("PRAGMA synchronous=NORMAL;")


def schema_exists(connection: sqlite3.Connection) -> bool:
    row = connection.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (ITEMS_TABLE,),
    ).fetchone()
    return row is not None


def ensure_schema(connection: sqlite3.Connection) -> bool:
    """Create the item table if missing; return True when it had to be created.

    Items are keyed by their signed 64-bit identity hash and stored whole as
    a JSON payload.
    """

    if schema_exists(connection):
        logger.debug("Item table found")
        return False

    logger.warning("Item table not found; creating %s", ITEMS_TABLE)
    connection.executescript(
        f"""
        CREATE TABLE IF NOT EXISTS {ITEMS_TABLE} (
            id INTEGER PRIMARY KEY,
            item_data TEXT NOT NULL
        );
        """
    )
    return True
