"""Restaurant menu ingestion, deduplication and keyword lookup."""
