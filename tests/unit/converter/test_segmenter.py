"""Tests for the block segmenter (notion_importer.converter.segmenter)."""

from __future__ import annotations

import pytest

from notion_importer.converter.mermaid import THEME_DIRECTIVE
from notion_importer.converter.rich_text import plain_text
from notion_importer.converter.segmenter import (
    is_table_separator,
    parse_table_row,
    segment,
)
from notion_importer.models import (
    Annotations,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Heading,
    NumberedListItem,
    Paragraph,
    RichText,
    Table,
    ToDo,
)


def types(blocks):
    return [b.type for b in blocks]


def only(blocks):
    assert len(blocks) == 1
    return blocks[0]


# =========================================================================
# Dispatch order and blank lines
# =========================================================================

class TestDispatch:
    def test_mixed_document(self):
        md = "\n".join([
            "# Title",
            "",
            "Intro paragraph.",
            "",
            "- [x] done",
            "- [ ] open",
            "- bullet",
            "1. first",
            "---",
            "> quoted",
            "```python",
            "x = 1",
            "```",
            "| a | b |",
            "| 1 | 2 |",
        ])
        assert types(segment(md)) == [
            "heading_1",
            "paragraph",
            "to_do",
            "to_do",
            "bulleted_list_item",
            "numbered_list_item",
            "divider",
            "callout",
            "code",
            "table",
        ]

    @pytest.mark.parametrize("md", ["", "\n\n", "   \n\t\n"])
    def test_blank_documents_produce_nothing(self, md):
        assert segment(md) == []

    def test_checkbox_wins_over_bullet(self):
        block = only(segment("- [ ] write tests"))
        assert isinstance(block, ToDo)
        assert plain_text(block.rich_text) == "write tests"

    def test_lines_are_trimmed_before_classification(self):
        block = only(segment("    ## Indented heading   "))
        assert isinstance(block, Heading)
        assert plain_text(block.rich_text) == "Indented heading"


# =========================================================================
# Headings and dividers
# =========================================================================

class TestHeadings:
    @pytest.mark.parametrize(
        ("md", "kind"),
        [
            ("# One", "heading_1"),
            ("## Two", "heading_2"),
            ("### Three", "heading_3"),
            ("#### Four", "heading_3"),
            ("###### Six", "heading_3"),
        ],
    )
    def test_levels_clamp_to_three(self, md, kind):
        assert only(segment(md)).type == kind

    def test_heading_requires_space(self):
        assert isinstance(only(segment("#hashtag")), Paragraph)

    def test_seven_hashes_is_paragraph(self):
        assert isinstance(only(segment("####### too deep")), Paragraph)

    def test_heading_text_is_inline_parsed(self):
        block = only(segment("# Hello **world**"))
        assert block.rich_text[1] == RichText("world", annotations=Annotations(bold=True))

    def test_headings_are_not_toggleable(self):
        assert only(segment("# H")).to_dict()["heading_1"]["is_toggleable"] is False


class TestDividers:
    @pytest.mark.parametrize("md", ["---", "***", "___", "-----", "-*-"])
    def test_divider_forms(self, md):
        assert isinstance(only(segment(md)), Divider)

    def test_two_dashes_is_paragraph(self):
        assert isinstance(only(segment("--")), Paragraph)


# =========================================================================
# Tables
# =========================================================================

class TestTables:
    def test_three_by_two_table(self):
        md = "| a | b | c |\n|---|:-:|--:|\n| 1 | 2 | 3 |\n| 4 | 5 | 6 |"
        table = only(segment(md))
        assert isinstance(table, Table)
        assert table.table_width == 3
        assert table.has_column_header is True
        # header + two data rows
        assert len(table.rows) == 3
        assert [plain_text(cell) for cell in table.rows[2]] == ["4", "5", "6"]

    def test_long_rows_are_clipped(self):
        table = only(segment("| a | b |\n| 1 | 2 | 3 | 4 |"))
        assert len(table.rows[1]) == 2

    def test_short_rows_are_padded_with_empty_runs(self):
        table = only(segment("| a | b | c |\n| 1 |"))
        assert len(table.rows[1]) == 3
        assert table.rows[1][1] == (RichText(""),)
        assert table.rows[1][2] == (RichText(""),)

    def test_every_row_matches_width_in_payload(self):
        table = only(segment("| a | b |\n| 1 |\n| 1 | 2 | 3 |"))
        rows = table.to_dict()["table"]["children"]
        assert all(len(r["table_row"]["cells"]) == 2 for r in rows)

    def test_cells_are_inline_parsed(self):
        table = only(segment("| **k** | [v](https://v.io) |"))
        key, value = table.rows[0]
        assert key[0].annotations.bold
        assert value[0].link == "https://v.io"

    def test_table_stops_at_non_pipe_line(self):
        blocks = segment("| a |\n| 1 |\nafter")
        assert types(blocks) == ["table", "paragraph"]

    def test_line_without_closing_pipe_is_not_a_table(self):
        assert isinstance(only(segment("| a | b")), Paragraph)

    def test_separator_only_table_produces_nothing(self):
        assert segment("|---|---|") == []

    def test_bare_pipe_before_rows_keeps_the_rows(self):
        blocks = segment("|\n| a | b |\n| 1 | 2 |")
        assert types(blocks) == ["paragraph", "table"]
        assert plain_text(blocks[0].rich_text) == "|"
        table = blocks[1]
        assert table.table_width == 2
        assert [plain_text(cell) for cell in table.rows[0]] == ["a", "b"]
        assert len(table.rows) == 2

    def test_bare_pipes_only_degrade_to_paragraphs(self):
        blocks = segment("|\n|")
        assert types(blocks) == ["paragraph", "paragraph"]


class TestTableHelpers:
    def test_parse_table_row(self):
        assert parse_table_row("|  a | b  |c|") == ["a", "b", "c"]

    def test_parse_table_row_keeps_empty_inner_cells(self):
        assert parse_table_row("| a || c |") == ["a", "", "c"]

    @pytest.mark.parametrize("line", ["|---|---|", "| :-- | --: |", "|:-:|"])
    def test_separator_rows(self, line):
        assert is_table_separator(line)

    @pytest.mark.parametrize("line", ["| a | b |", "| - a |", "---"])
    def test_non_separator_rows(self, line):
        assert not is_table_separator(line)


# =========================================================================
# Lists and checkboxes
# =========================================================================

class TestLists:
    @pytest.mark.parametrize("md", ["- item", "* item"])
    def test_bullets(self, md):
        block = only(segment(md))
        assert isinstance(block, BulletedListItem)
        assert plain_text(block.rich_text) == "item"

    def test_plus_bullet_is_paragraph(self):
        assert isinstance(only(segment("+ item")), Paragraph)

    @pytest.mark.parametrize("md", ["1. first", "42. answer"])
    def test_numbered(self, md):
        assert isinstance(only(segment(md)), NumberedListItem)

    def test_number_without_space_is_paragraph(self):
        assert isinstance(only(segment("3.14 is pi")), Paragraph)

    @pytest.mark.parametrize(
        ("md", "checked"),
        [
            ("- [ ] open", False),
            ("- [x] done", True),
            ("* [X] shouted", True),
            ("+ [x] plus", True),
        ],
    )
    def test_checkboxes(self, md, checked):
        block = only(segment(md))
        assert isinstance(block, ToDo)
        assert block.checked is checked
        assert block.to_dict()["to_do"]["checked"] is checked


# =========================================================================
# Code fences
# =========================================================================

class TestCodeFences:
    def test_language_is_normalized(self):
        block = only(segment("```py\nprint(1)\n```"))
        assert block == Code(text="print(1)", language="python")

    def test_body_is_literal(self):
        block = only(segment("```\n  **kept** [as](is)\n\n# not a heading\n```"))
        assert block.text == "  **kept** [as](is)\n\n# not a heading"
        assert block.language == "plain text"

    def test_unterminated_fence_runs_to_end(self):
        blocks = segment("before\n```js\nlet a\nlet b")
        assert types(blocks) == ["paragraph", "code"]
        assert blocks[1].text == "let a\nlet b"

    def test_text_after_fence_continues(self):
        blocks = segment("```\nx\n```\nafter")
        assert types(blocks) == ["code", "paragraph"]

    def test_code_payload_is_single_unannotated_run(self):
        payload = only(segment("```sh\nls *.md\n```")).to_dict()
        assert payload["code"] == {
            "rich_text": [{"type": "text", "text": {"content": "ls *.md"}}],
            "language": "shell",
        }

    def test_mermaid_gets_theme(self):
        block = only(segment("```mermaid\ngraph TD\n  A-->B\n```"))
        assert block.language == "mermaid"
        assert block.text == f"{THEME_DIRECTIVE}\ngraph TD\n  A-->B"

    def test_mermaid_with_own_theme_is_untouched(self):
        code = "%%{init: {'theme': 'dark'}}%%\ngraph TD"
        block = only(segment(f"```mermaid\n{code}\n```"))
        assert block.text == code

    def test_long_code_is_truncated(self):
        block = only(segment("```\n" + "x" * 3000 + "\n```"))
        assert len(block.text) == 2000
        assert block.text.endswith("...")


# =========================================================================
# Blockquotes and paragraphs
# =========================================================================

class TestBlockquotes:
    def test_consecutive_quote_lines_join(self):
        block = only(segment("> first\n> second **bold**"))
        assert isinstance(block, Callout)
        assert plain_text(block.rich_text) == "first\nsecond bold"

    def test_callout_icon(self):
        payload = only(segment("> tip")).to_dict()
        assert payload["callout"]["icon"] == {"type": "emoji", "emoji": "\U0001f4a1"}

    def test_quote_without_space_is_paragraph(self):
        assert isinstance(only(segment(">tight")), Paragraph)

    def test_blank_line_splits_quotes(self):
        assert types(segment("> a\n\n> b")) == ["callout", "callout"]


class TestParagraphs:
    def test_each_line_is_its_own_paragraph(self):
        assert types(segment("one\ntwo")) == ["paragraph", "paragraph"]

    def test_long_paragraph_is_truncated(self):
        block = only(segment("y" * 2500))
        text = plain_text(block.rich_text)
        assert len(text) == 2000
        assert text.endswith("...")

    def test_pending_children_are_empty(self):
        assert all(not b.pending_children for b in segment("# a\n- b\n> c"))
