"""CLI entrypoint for loading JSON item batches into the store."""

from __future__ import annotations

import argparse
import json

from dotenv import load_dotenv

from menumap.config import Settings
from menumap.ingestion.batches import collect_batches
from menumap.ingestion.dedupe import load_batches
from menumap.search.repository import MenuRepository

load_dotenv()


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Load JSON item batches into the SQLite store")
    parser.add_argument(
        "--batch-path",
        default=str(settings.batch_dir),
        help="Batch file or directory of *.json batches",
    )
    parser.add_argument("--db-path", default=str(settings.db_path), help="SQLite database path")
    args = parser.parse_args(argv)

    with MenuRepository(args.db_path) as repository:
        stats = load_batches(collect_batches(args.batch_path), repository)
        total = repository.count()

    payload = stats.to_dict()
    payload["stored"] = total
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0 if stats.errors == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
