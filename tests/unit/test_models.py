"""Tests for block records and rich text serialization."""

from __future__ import annotations

import dataclasses

import pytest

from notion_importer.models import (
    HEADING_KINDS,
    PLAIN,
    Annotations,
    BlockKind,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Heading,
    NumberedListItem,
    Paragraph,
    RichText,
    Table,
    TableOfContents,
    ToDo,
)

RUNS = (RichText("hi"),)
RUNS_PAYLOAD = [{"type": "text", "text": {"content": "hi"}}]


class TestAnnotations:
    def test_merged_is_or(self):
        merged = Annotations(bold=True).merged(italic=True, bold=False)
        assert merged == Annotations(bold=True, italic=True)

    def test_any(self):
        assert not PLAIN.any()
        assert Annotations(code=True).any()

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PLAIN.bold = True  # type: ignore[misc]


class TestRichText:
    def test_plain_payload_has_no_annotations(self):
        assert RichText("x").to_dict() == {"type": "text", "text": {"content": "x"}}

    def test_link_payload(self):
        assert RichText("x", link="https://x.io").to_dict() == {
            "type": "text",
            "text": {"content": "x", "link": {"url": "https://x.io"}},
        }

    def test_annotations_payload_lists_every_flag(self):
        payload = RichText("x", annotations=Annotations(bold=True)).to_dict()
        assert payload["annotations"] == {
            "bold": True,
            "italic": False,
            "strikethrough": False,
            "code": False,
        }

    def test_with_annotations_keeps_link(self):
        run = RichText("x", link="https://x.io").with_annotations(strikethrough=True)
        assert run.link == "https://x.io"
        assert run.annotations.strikethrough


class TestBlockPayloads:
    @pytest.mark.parametrize(
        ("block", "kind"),
        [
            (Paragraph(rich_text=RUNS), BlockKind.PARAGRAPH),
            (BulletedListItem(rich_text=RUNS), BlockKind.BULLETED_ITEM),
            (NumberedListItem(rich_text=RUNS), BlockKind.NUMBERED_ITEM),
        ],
    )
    def test_text_blocks(self, block, kind):
        assert block.to_dict() == {
            "object": "block",
            "type": kind.value,
            kind.value: {"rich_text": RUNS_PAYLOAD},
        }

    @pytest.mark.parametrize(("level", "kind"), [(1, "heading_1"), (3, "heading_3"), (6, "heading_3"), (0, "heading_1")])
    def test_heading_level_clamped(self, level, kind):
        assert Heading(level=level, rich_text=RUNS).type == kind

    def test_heading_kinds(self):
        assert Heading(level=2, rich_text=RUNS).kind in HEADING_KINDS
        assert Paragraph(rich_text=RUNS).kind not in HEADING_KINDS

    def test_todo(self):
        assert ToDo(rich_text=RUNS, checked=True).to_dict()["to_do"] == {
            "rich_text": RUNS_PAYLOAD,
            "checked": True,
        }

    def test_code(self):
        assert Code(text="a *b*", language="python").to_dict()["code"] == {
            "rich_text": [{"type": "text", "text": {"content": "a *b*"}}],
            "language": "python",
        }

    def test_callout(self):
        assert Callout(rich_text=RUNS).to_dict()["callout"] == {
            "rich_text": RUNS_PAYLOAD,
            "icon": {"type": "emoji", "emoji": "\U0001f4a1"},
        }

    def test_table(self):
        table = Table(table_width=2, rows=((RUNS, RUNS), (RUNS, (RichText(""),))))
        body = table.to_dict()["table"]
        assert body["table_width"] == 2
        assert body["has_column_header"] is True
        assert body["has_row_header"] is False
        assert body["children"][1] == {
            "type": "table_row",
            "table_row": {
                "cells": [RUNS_PAYLOAD, [{"type": "text", "text": {"content": ""}}]],
            },
        }

    @pytest.mark.parametrize(("block", "name"), [(Divider(), "divider"), (TableOfContents(), "table_of_contents")])
    def test_empty_bodies(self, block, name):
        assert block.to_dict() == {"object": "block", "type": name, name: {}}


class TestPendingChildren:
    def test_default_empty(self):
        assert Paragraph(rich_text=RUNS).pending_children == ()

    def test_never_serialized(self):
        heading = Heading(
            level=2, rich_text=RUNS, is_toggleable=True,
            pending_children=(TableOfContents(),),
        )
        payload = heading.to_dict()
        assert payload == {
            "object": "block",
            "type": "heading_2",
            "heading_2": {"rich_text": RUNS_PAYLOAD, "is_toggleable": True},
        }

    def test_blocks_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Divider().pending_children = ()  # type: ignore[misc]
