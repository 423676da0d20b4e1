"""CLI entrypoint for one-shot keyword queries against the store."""

from __future__ import annotations

import argparse
import json

from dotenv import load_dotenv

from menumap.config import Settings
from menumap.search.service import MenuSearchService

load_dotenv()


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Run a keyword query against stored menu items")
    parser.add_argument("--db-path", default=str(settings.db_path), help="SQLite database path")
    parser.add_argument("--query", required=True, help="Free-text query")
    args = parser.parse_args(argv)

    with MenuSearchService.from_db_path(args.db_path) as service:
        items = service.search(args.query)

    payload = {
        "query": args.query,
        "count": len(items),
        "results": [item.to_dict() for item in items],
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
