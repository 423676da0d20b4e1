"""Server entrypoint: load batches, build the index once, then serve queries."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from menumap.config import Settings
from menumap.ingestion.batches import collect_batches
from menumap.logging_setup import configure_logging
from menumap.search.repository import MenuRepository
from menumap.search.service import MenuSearchService
from menumap.server.app import create_app

load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(settings: Settings, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve keyword lookups over stored menu items")
    parser.add_argument("--db-path", default=str(settings.db_path), help="SQLite database path")
    parser.add_argument("--batch-dir", default=str(settings.batch_dir), help="Directory of JSON batches")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument(
        "--skip-load",
        action="store_true",
        help="Serve what is already stored without loading batches",
    )
    return parser.parse_args(argv)


def build_service(db_path: str, batch_dir: str | None) -> MenuSearchService:
    """Open the store, load batches when given, and publish the first index."""

    service = MenuSearchService(MenuRepository(db_path))
    if batch_dir is None:
        service.rebuild()
        return service

    stats = service.load_batch_files(collect_batches(batch_dir))
    LOGGER.info(
        "Loaded %d/%d batches (%d new items, %d duplicates, %d errors)",
        stats.loaded,
        stats.scanned,
        stats.inserted,
        stats.duplicates,
        stats.errors,
    )
    return service


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    args = _parse_args(settings, argv)
    log_path = configure_logging(settings.log_dir, settings.log_level)
    LOGGER.info("Logging to %s", log_path)

    service = build_service(args.db_path, None if args.skip_load else args.batch_dir)
    app = create_app(service)
    LOGGER.info("listening on %s:%d", args.host, args.port)
    try:
        app.run(host=args.host, port=args.port, threaded=True)
    finally:
        service.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
