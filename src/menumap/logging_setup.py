"""Console plus daily rolling file logging for long-running entrypoints."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
import sys
from types import TracebackType

LOG_FILE_NAME = "menu_manager.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def _log_uncaught(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))


def configure_logging(log_dir: str | Path | None = None, level: str | int = logging.INFO) -> Path | None:
    """Install handlers on the root logger; return the log file path when one is used."""

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_path: Path | None = None
    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_path = directory / LOG_FILE_NAME
        handlers.append(
            TimedRotatingFileHandler(log_path, when="midnight", backupCount=14, encoding="utf-8")
        )

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    sys.excepthook = _log_uncaught
    return log_path
