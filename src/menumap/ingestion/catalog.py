"""Default source wiring for the known restaurant menus."""

from __future__ import annotations

from pathlib import Path

from menumap.ingestion.adapters import build_default_parsers
from menumap.ingestion.ingestor import MenuIngestor
from menumap.ingestion.sources import DEFAULT_HTTP_TIMEOUT_SECONDS, PdfTextSource, WebBlockSource

CANLIS_MENU_URL = "https://canlis.com/menu"
CANLIS_SELECTOR = "div.mb4"
LARK_MENU_URL = "https://www.larkseattle.com/menu"
LARK_SELECTOR = "div.sqs-html-content"
LARK_ITEM_SELECTOR = "p"


def build_default_ingestor(
    *,
    bateau_pdf: str | Path,
    westward_pdf: str | Path,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> MenuIngestor:
    """Pair every catalog parser with its source."""

    parsers = build_default_parsers()
    ingestor = MenuIngestor()
    ingestor.register("westward", PdfTextSource(westward_pdf), parsers["westward"])
    ingestor.register("bateau", PdfTextSource(bateau_pdf), parsers["bateau"])
    ingestor.register(
        "canlis",
        WebBlockSource(CANLIS_MENU_URL, CANLIS_SELECTOR, timeout=timeout),
        parsers["canlis"],
    )
    ingestor.register(
        "lark",
        WebBlockSource(LARK_MENU_URL, LARK_SELECTOR, item_selector=LARK_ITEM_SELECTOR, timeout=timeout),
        parsers["lark"],
    )
    return ingestor
