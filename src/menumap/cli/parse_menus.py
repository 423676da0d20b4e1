"""CLI entrypoint for turning source menus into JSON item batches."""

from __future__ import annotations

import argparse
from datetime import date
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from menumap.config import Settings
from menumap.ingestion.batches import batch_file_name, write_batch
from menumap.ingestion.catalog import build_default_ingestor

load_dotenv()

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Parse restaurant menus into JSON item batches")
    parser.add_argument("--bateau-pdf", default="res/Bateau-a-la-carte.pdf", help="Bateau menu PDF")
    parser.add_argument("--westward-pdf", default="res/Westward-Dinner-Food.pdf", help="Westward menu PDF")
    parser.add_argument("--out-dir", default=str(settings.batch_dir), help="Directory for JSON batches")
    parser.add_argument("--updated", default=None, help="ISO date stamp for items (default: today)")
    parser.add_argument(
        "--source",
        action="append",
        default=None,
        help="Only run the named source; repeatable",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")

    stamp = args.updated or date.today().isoformat()
    ingestor = build_default_ingestor(
        bateau_pdf=args.bateau_pdf,
        westward_pdf=args.westward_pdf,
        timeout=settings.http_timeout_seconds,
    )
    if args.source:
        unknown = sorted(set(args.source) - set(ingestor.source_names))
        if unknown:
            parser.error(f"unknown source(s): {', '.join(unknown)}")

    results, stats = ingestor.ingest_all(names=args.source, updated=stamp)

    out_dir = Path(args.out_dir)
    written: list[str] = []
    for result in results:
        if not result.success:
            continue
        target = write_batch(result.items, out_dir / batch_file_name(result.restaurant, stamp))
        LOGGER.info("Wrote %d items to %s", len(result.items), target)
        written.append(str(target))

    payload = stats.to_dict()
    payload["batches"] = written
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0 if stats.errors == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
