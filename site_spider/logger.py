# === FILE: site_spider/logger.py ===
"""Logging setup for **SiteSpider**.

* One project logger, ``SiteSpider``; modules log through child loggers
  obtained with :func:`get_logger` (``SiteSpider.pipeline`` and so on)::

      from site_spider.logger import get_logger
      logger = get_logger(__name__)
      logger.info("Extraction started")

* Console output goes to **stderr**: ``site-spider extract`` prints its
  JSON report on stdout and the two must not mix.
* Optional rotating log file, see :func:`configure`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, TextIO, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteSpider"

_LevelT = Union[int, str]

# 5 MiB x 3 backups
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUP_COUNT: Final[int] = 3


def _console_handler(fmt: str, stream: Optional[TextIO]) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Union[Path, str], fmt: str) -> RotatingFileHandler:
    Path(file).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the project logger or one of its children.

    ``get_logger("site_spider.trackers")`` and ``get_logger("trackers")`` both
    give ``SiteSpider.trackers``.
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    suffix = name.split(".", 1)[1] if name.startswith("site_spider.") else name
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}")


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """(Re)configure the project logger, replacing its handlers.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a rotating logfile in addition to the console. *None* → console only.
    log_format
        Format string for :class:`logging.Formatter`.
    stream
        Console stream; *None* means ``sys.stderr``.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    lg.addHandler(_console_handler(log_format, stream))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "WARNING",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Shortcut used by the CLI: console on stderr, optional file."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "logger", "get_logger", "configure", "init_logging"]
