"""Observability: structured logging for notion_importer."""

from __future__ import annotations

from .logger import ROOT_LOGGER, StructuredFormatter, configure_logging, get_logger

__all__ = [
    "ROOT_LOGGER",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
