"""Domain errors raised by ingestion sources and batch readers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class IngestionError(Exception):
    """Base error for a single menu source or batch."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (source={self.source})"


@dataclass(slots=True)
class ExtractionError(IngestionError):
    """Source text could not be obtained: missing file, corrupt PDF, unreachable page."""


@dataclass(slots=True)
class MalformedRecordError(IngestionError):
    """A JSON batch file could not be parsed into items."""

    @classmethod
    def for_path(cls, path: Path, message: str) -> "MalformedRecordError":
        return cls(source=str(path), message=message)
