from __future__ import annotations

from pathlib import Path

import httpx
import pymupdf
import pytest

from menumap.ingestion.adapters import build_default_parsers
from menumap.ingestion.errors import ExtractionError
from menumap.ingestion.sources import PdfTextSource, TextFileSource, WebBlockSource

_LARK_HTML = """
<html><body>
  <div class="sqs-html-content">
    <p>Duck Breast<br>cherry, thyme<br>32</p>
    <p>Chicken<br>morels, jus<br>36</p>
  </div>
  <div class="sqs-html-content">
    <p>Private party dining available</p>
    <p>Halibut<br>peas, mint<br>38</p>
  </div>
  <div class="sqs-html-content">
    <p>Scallops<br>corn, chanterelles<br>41</p>
  </div>
</body></html>
"""


def _build_pdf(path: Path, lines: list[str]) -> None:
    doc = pymupdf.open()
    page = doc.new_page()
    for offset, line in enumerate(lines):
        page.insert_text((72, 72 + offset * 24), line)
    doc.save(str(path))
    doc.close()


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_pdf_source_returns_page_text_with_line_breaks(tmp_path: Path) -> None:
    pdf_path = tmp_path / "bateau.pdf"
    _build_pdf(pdf_path, ["Grilled Oysters, lemon, mignonette 16", "Beef Tartare, egg yolk, capers 22"])

    document = PdfTextSource(pdf_path).fetch()
    items = build_default_parsers()["bateau"].parse(document, updated="2024-04-11")

    assert "Grilled Oysters" in document.text
    assert "\n" in document.text
    assert [item.name for item in items] == ["Grilled Oysters", "Beef Tartare"]


def test_pdf_source_reports_missing_and_corrupt_files(tmp_path: Path) -> None:
    corrupt = tmp_path / "corrupt.pdf"
    corrupt.write_bytes(b"this is not a pdf")

    with pytest.raises(ExtractionError, match="not found"):
        PdfTextSource(tmp_path / "missing.pdf").fetch()
    with pytest.raises(ExtractionError):
        PdfTextSource(corrupt).fetch()


def test_text_file_source_decodes_menu_text(tmp_path: Path) -> None:
    path = tmp_path / "menu.txt"
    path.write_text("Crème Brûlée, vanilla bean 12\n", encoding="utf-8")

    document = TextFileSource(path).fetch()

    assert document.text.startswith("Crème Brûlée")
    with pytest.raises(ExtractionError):
        TextFileSource(tmp_path / "missing.txt").fetch()


def test_web_source_groups_blocks_by_container() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == httpx.URL("https://lark.example/menu")
        return httpx.Response(200, text=_LARK_HTML)

    source = WebBlockSource(
        "https://lark.example/menu",
        "div.sqs-html-content",
        item_selector="p",
        client=_client(handler),
    )
    document = source.fetch()
    items = build_default_parsers()["lark"].parse(document, updated="2024-06-03")

    assert [len(section) for section in document.sections] == [2, 2, 1]
    assert document.blocks[0] == "Duck Breast\ncherry, thyme\n32"
    assert [item.name for item in items] == ["Duck Breast", "Chicken", "Scallops"]


def test_web_source_without_item_selector_yields_one_section() -> None:
    source = WebBlockSource(
        "https://lark.example/menu",
        "div.sqs-html-content p",
        client=_client(lambda request: httpx.Response(200, text=_LARK_HTML)),
    )
    document = source.fetch()

    assert len(document.sections) == 1
    assert len(document.blocks) == 5
    items = build_default_parsers()["lark"].parse(document, updated="2024-06-03")
    assert [item.name for item in items] == ["Duck Breast", "Chicken"]


def test_web_source_wraps_http_failures() -> None:
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExtractionError, match="Failed to fetch"):
        WebBlockSource("https://lark.example/menu", "p", client=_client(server_error)).fetch()
    with pytest.raises(ExtractionError, match="connection refused"):
        WebBlockSource("https://lark.example/menu", "p", client=_client(unreachable)).fetch()
