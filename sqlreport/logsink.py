"""Rotating log sink for report blocks."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Union

from .constants import SEPARATOR

logger = logging.getLogger(__name__)

SINK_FORMAT = "%(asctime)s %(message)s"


def rotating_log_sink(
    path: Union[str, "os.PathLike[str]"],
    *,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    name: str = "sqlreport.errors",
    encoding: str = "utf-8",
) -> logging.Logger:
    """
    Return a logger that appends to `path`, rotating it at `max_bytes`.

    The logger does not propagate to the root logger, so report blocks only
    end up in the file. Calling this twice with the same name reuses the
    existing handler.
    """
    sink = logging.getLogger(name)
    sink.setLevel(logging.INFO)
    sink.propagate = False

    target = os.path.abspath(os.fspath(path))
    for handler in sink.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == target:
            return sink

    handler = RotatingFileHandler(
        target, maxBytes=max_bytes, backupCount=backup_count, encoding=encoding
    )
    handler.setFormatter(logging.Formatter(SINK_FORMAT))
    sink.addHandler(handler)
    logger.debug("Report log sink %s writes to %s", name, target)
    return sink


def write_entry(sink: logging.Logger, text: str) -> None:
    """Append a report block followed by a separator line and an empty line."""
    sink.info("%s", text)
    sink.info("%s", SEPARATOR)
    sink.info("")
