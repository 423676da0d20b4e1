"""Ingestion package interfaces."""

from .errors import ExtractionError, IngestionError, MalformedRecordError
from .ingestor import IngestionResult, IngestionRunStats, MenuIngestor
from .models import PRICE_UNKNOWN, PRICE_ZERO, CandidateEntry, Item, RawDocument

__all__ = [
    "CandidateEntry",
    "ExtractionError",
    "IngestionError",
    "IngestionResult",
    "IngestionRunStats",
    "Item",
    "MalformedRecordError",
    "MenuIngestor",
    "PRICE_UNKNOWN",
    "PRICE_ZERO",
    "RawDocument",
]
