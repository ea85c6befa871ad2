"""Tests for the MarkdownToNotionConverter pipeline."""

from __future__ import annotations

import json

from notion_importer.config import ImporterConfig, TocOptions
from notion_importer.converter.md_to_notion import (
    MarkdownToNotionConverter,
    blocks_to_payload,
)
from notion_importer.models import ConversionResult

DOC = """# Guide

Some **intro** text.

## Install

```bash
pip install notion-importer
```

## Use

- [ ] read the docs
"""


class TestConvert:
    def test_returns_conversion_result(self, converter):
        result = converter.convert("hello")
        assert isinstance(result, ConversionResult)
        assert [b.type for b in result.blocks] == ["paragraph"]
        assert result.heading_count == 0
        assert result.toc_added is False

    def test_toc_added_for_three_headings(self, converter):
        result = converter.convert(DOC)
        assert result.heading_count == 3
        assert result.toc_added is True
        assert [b.type for b in result.blocks[:3]] == ["heading_2", "divider", "heading_1"]

    def test_toc_disabled(self):
        conv = MarkdownToNotionConverter(ImporterConfig(toc=TocOptions(enabled=False)))
        result = conv.convert(DOC)
        assert result.toc_added is False
        assert result.blocks[0].type == "heading_1"

    def test_default_config(self):
        result = MarkdownToNotionConverter().convert("# a\n## b\n### c")
        assert result.toc_added is True

    def test_empty_document(self, converter):
        result = converter.convert("")
        assert result.blocks == []
        assert result.toc_added is False


class TestPayload:
    def test_blocks_to_payload(self, converter):
        payload = blocks_to_payload(converter.convert("# T\n\ntext").blocks)
        assert payload == [
            {
                "object": "block",
                "type": "heading_1",
                "heading_1": {
                    "rich_text": [{"type": "text", "text": {"content": "T"}}],
                    "is_toggleable": False,
                },
            },
            {
                "object": "block",
                "type": "paragraph",
                "paragraph": {
                    "rich_text": [{"type": "text", "text": {"content": "text"}}],
                },
            },
        ]

    def test_payload_is_json_serializable(self, converter):
        payload = blocks_to_payload(converter.convert(DOC).blocks)
        assert json.loads(json.dumps(payload)) == payload

    def test_debug_dump_writes_to_stderr(self, capsys):
        conv = MarkdownToNotionConverter(ImporterConfig(debug_dump_payload=True))
        conv.convert("x")
        err = capsys.readouterr().err
        assert "Notion blocks payload" in err
        assert '"paragraph"' in err

    def test_debug_dump_scrubs_token(self, capsys):
        token = "secret_abcdef123456"
        conv = MarkdownToNotionConverter(ImporterConfig(token=token, debug_dump_payload=True))
        conv.convert(f"key is {token}")
        err = capsys.readouterr().err
        assert token not in err
        assert "<redacted:...3456>" in err
