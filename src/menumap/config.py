"""Runtime configuration for the menu server and CLI tools."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping


DEFAULT_DB_PATH = "res/menu_db.sqlite"
DEFAULT_BATCH_DIR = "res"
DEFAULT_LOG_DIR = "res"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_HTTP_TIMEOUT_SECONDS = 20.0
DEFAULT_LOG_LEVEL = "INFO"


def _parse_port(*, name: str, raw_value: str) -> int:
    value = int(raw_value)
    if not 1 <= value <= 65535:
        raise ValueError(f"{name} must be between 1 and 65535")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    value = float(raw_value)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _require(source: Mapping[str, str], name: str, default: str) -> str:
    value = source.get(name, default).strip()
    if not value:
        raise ValueError(f"{name} cannot be empty")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated runtime settings."""

    db_path: Path = Path(DEFAULT_DB_PATH)
    batch_dir: Path = Path(DEFAULT_BATCH_DIR)
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        db_path_raw = _require(source, "MENUMAP_DB_PATH", DEFAULT_DB_PATH)
        batch_dir_raw = _require(source, "MENUMAP_BATCH_DIR", DEFAULT_BATCH_DIR)
        log_dir_raw = _require(source, "MENUMAP_LOG_DIR", DEFAULT_LOG_DIR)
        host = _require(source, "MENUMAP_HOST", DEFAULT_HOST)
        port_raw = _require(source, "MENUMAP_PORT", str(DEFAULT_PORT))
        timeout_raw = _require(source, "MENUMAP_HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        log_level = _require(source, "MENUMAP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"MENUMAP_LOG_LEVEL is not a known logging level: {log_level}")

        return cls(
            db_path=Path(db_path_raw),
            batch_dir=Path(batch_dir_raw),
            log_dir=Path(log_dir_raw),
            host=host,
            port=_parse_port(name="MENUMAP_PORT", raw_value=port_raw),
            http_timeout_seconds=_parse_positive_float(
                name="MENUMAP_HTTP_TIMEOUT_SECONDS",
                raw_value=timeout_raw,
                minimum=0.1,
            ),
            log_level=log_level,
        )
