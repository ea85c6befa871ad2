"""Shared test fixtures for the notion_importer test suite."""

from __future__ import annotations

import logging

import pytest

from notion_importer.config import ImporterConfig
from notion_importer.converter.md_to_notion import MarkdownToNotionConverter


@pytest.fixture
def config() -> ImporterConfig:
    """Default test configuration with a dummy token and no pacing delays."""
    return ImporterConfig(
        token="test_token_1234",
        batch_delay=0.0,
        child_delay=0.0,
        delete_delay=0.0,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
        rate_limit_rps=10_000.0,
    )


@pytest.fixture
def converter(config: ImporterConfig) -> MarkdownToNotionConverter:
    """Markdown-to-Notion converter using the default test config."""
    return MarkdownToNotionConverter(config)


@pytest.fixture(autouse=True)
def _no_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real credentials out of the tests."""
    monkeypatch.delenv("NOTION_API_KEY", raising=False)
    monkeypatch.delenv("NOTION_DATABASE_ID", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers that configure_logging attached during a test."""
    yield
    logger = logging.getLogger("notion_importer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
