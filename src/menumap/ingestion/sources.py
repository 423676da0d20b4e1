"""Extraction sources that hand raw menu text to the parsers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup
from charset_normalizer import from_bytes
import httpx
import pymupdf

from menumap.ingestion.errors import ExtractionError
from menumap.ingestion.models import RawDocument

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT_SECONDS = 20.0
DEFAULT_USER_AGENT = "menumap/0.1 (+menu indexer)"


@runtime_checkable
class MenuSource(Protocol):
    """Anything that can produce a RawDocument for one restaurant menu."""

    @property
    def location(self) -> str:
        """Path or URL the text comes from, used in error reports."""

    def fetch(self) -> RawDocument:
        """Return the raw text, raising ExtractionError on failure."""


class PdfTextSource:
    """Concatenate page text from a PDF, keeping line breaks."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def fetch(self) -> RawDocument:
        if not self._path.is_file():
            raise ExtractionError(self.location, "PDF file not found")
        try:
            with pymupdf.open(self._path, filetype="pdf") as doc:
                page_count = doc.page_count
                text = "".join(page.get_text() for page in doc)
        except (RuntimeError, ValueError, OSError) as exc:
            raise ExtractionError(self.location, f"Failed to extract PDF text: {exc}") from exc
        if page_count == 0:
            raise ExtractionError(self.location, "PDF has no pages")

        logger.debug("Extracted %d characters from %s", len(text), self._path)
        return RawDocument(source=self.location, text=text)


class TextFileSource:
    """Read menu text already extracted to a plain-text file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def fetch(self) -> RawDocument:
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise ExtractionError(self.location, f"Failed to read text file: {exc}") from exc
        return RawDocument(source=self.location, text=self._decode(raw))

    def _decode(self, raw: bytes) -> str:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            pass
        best = from_bytes(raw).best()
        if best is None or not best.encoding:
            raise ExtractionError(self.location, "Could not detect text encoding")
        logger.debug("Decoded %s as %s", self._path, best.encoding)
        return str(best)


class WebBlockSource:
    """Fetch a menu page and return element text grouped into sections.

    Without ``item_selector`` every element matching ``selector`` is a block
    in one section. With it, each ``selector`` match is a container whose
    ``item_selector`` matches form that container's section.
    """

    def __init__(
        self,
        url: str,
        selector: str,
        *,
        item_selector: str | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._selector = selector
        self._item_selector = item_selector
        self._timeout = timeout
        self._client = client

    @property
    def location(self) -> str:
        return self._url

    def fetch(self) -> RawDocument:
        html = self._get()
        soup = BeautifulSoup(html, "lxml")
        matches = soup.select(self._selector)
        if self._item_selector is None:
            sections = [[_element_text(element) for element in matches]]
        else:
            sections = [
                [_element_text(element) for element in container.select(self._item_selector)]
                for container in matches
            ]
        logger.debug(
            "Matched %d sections for %s at %s",
            len(sections),
            self._selector,
            self._url,
        )
        return RawDocument(source=self.location, sections=sections)

    def _get(self) -> str:
        try:
            if self._client is not None:
                response = self._client.get(self._url)
            else:
                with httpx.Client(
                    timeout=self._timeout,
                    headers={"User-Agent": DEFAULT_USER_AGENT},
                    follow_redirects=True,
                ) as client:
                    response = client.get(self._url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ExtractionError(self.location, f"Failed to fetch menu page: {exc}") from exc
        return response.text


def _element_text(element) -> str:
    return element.get_text("\n", strip=True)
