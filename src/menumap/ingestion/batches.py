"""JSON batch files: one array of item records per source run."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from menumap.ingestion.errors import MalformedRecordError
from menumap.ingestion.models import Item


def write_batch(items: Iterable[Item], path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = [item.to_dict() for item in items]
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def read_batch(path: str | Path) -> list[Item]:
    """Parse a batch file, raising MalformedRecordError for anything but a valid item array."""

    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedRecordError.for_path(source, f"Failed to read batch file: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedRecordError.for_path(source, f"Invalid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise MalformedRecordError.for_path(source, "Batch payload is not an array")

    items: list[Item] = []
    for position, record in enumerate(payload):
        if not isinstance(record, dict):
            raise MalformedRecordError.for_path(source, f"Record {position} is not an object")
        try:
            items.append(Item.from_dict(record))
        except ValueError as exc:
            raise MalformedRecordError.for_path(source, f"Record {position}: {exc}") from exc
    return items


def batch_file_name(restaurant: str, stamp: str) -> str:
    """Build ``<restaurant>_<MM-DD>.json`` from an ISO date stamp."""

    month_day = stamp[5:10] if len(stamp) >= 10 else stamp
    return f"{restaurant.lower()}_{month_day}.json"


def collect_batches(target: str | Path) -> list[Path]:
    location = Path(target)
    if location.is_file():
        return [location]
    if location.is_dir():
        return sorted(path for path in location.glob("*.json") if path.is_file())
    return []
