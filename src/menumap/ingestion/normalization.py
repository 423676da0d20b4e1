"""Text normalization helpers applied before menu segmentation."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_RUN_RE = re.compile(r" {2,}")
_NEWLINE_RUN_RE = re.compile(r"\n{2,}")
_DECORATION_CHARS = "*"


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_menu_text(text: str) -> str:
    """Drop decoration and collapse space and newline runs, keeping line structure."""

    cleaned = text.translate({ord(char): None for char in _DECORATION_CHARS})
    cleaned = _SPACE_RUN_RE.sub(" ", cleaned)
    return _NEWLINE_RUN_RE.sub("\n", cleaned)
