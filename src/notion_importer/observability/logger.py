"""Structured JSON logger for notion_importer.

Every log record is emitted as a single-line JSON object::

    {"ts": "2026-10-19T12:00:00.123456+00:00", "level": "INFO",
     "logger": "notion_importer.uploader", "message": "batch uploaded",
     "batch": 2, "batches": 3, "blocks": 100}

Usage::

    from notion_importer.observability import get_logger

    log = get_logger("notion_importer.uploader")
    log.info("batch uploaded", extra={"extra_fields": {"batch": 2}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "notion_importer"


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts``, ``level``, ``logger`` and ``message``.
    Fields passed via ``extra={"extra_fields": {...}}`` are merged into the
    top-level object; exception info is serialised when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(
            record, "extra_fields", None
        )
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger in the ``notion_importer`` hierarchy.

    Child loggers carry no handler of their own; records propagate to the
    root ``notion_importer`` logger, which :func:`configure_logging` sets up.
    """
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.WARNING,
    *,
    stream: Any | None = None,
) -> logging.Logger:
    """Attach a :class:`StructuredFormatter` handler to the root logger.

    Idempotent: repeated calls reset the level and stream but never add a
    second handler.

    Parameters
    ----------
    level:
        Minimum log level, as an ``int`` or a case-insensitive name.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    resolved_level = (
        logging.getLevelName(level.upper())
        if isinstance(level, str)
        else level
    )
    logger.setLevel(resolved_level)

    handler = next(
        (h for h in logger.handlers if isinstance(h.formatter, StructuredFormatter)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler):
        handler.setStream(stream or sys.stderr)

    # Prevent duplicate messages when the root logger also has handlers.
    logger.propagate = False
    return logger
