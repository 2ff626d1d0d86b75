"""Logging setup shared by the generator, the puzzle service and the CLI."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
ROOT_LOGGER_NAME = "crswrd"


def level_from_name(name: Union[str, int, None], default: int = logging.INFO) -> int:
    """Translate a CLI-style level name (``"debug"``, ``"WARNING"``) to a logging level."""

    if isinstance(name, int):
        return name
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: Union[str, int] = logging.INFO) -> None:
    """Replace the root handlers with one stderr handler at ``level``.

    At INFO a generation prints one line per attempt. Rejected layouts show
    up as WARNING, a puzzle that cannot be served at all as ERROR, and word
    by word placement only at DEBUG.
    """

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream_handler)
    root.setLevel(level_from_name(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger under ``crswrd``; installs the default handler on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
