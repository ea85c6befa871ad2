"""Split a Markdown document into Notion block records.

The document is scanned line by line.  Each non-blank line is classified by
the first rule that matches, in this fixed order:

1. fenced code (consumes lines up to the closing fence or end of input)
2. ATX heading (``#`` to ``######``; levels 4-6 collapse to heading_3)
3. thematic break -> divider
4. pipe table (consumes following ``|`` lines, separator rows dropped)
5. checkbox item ``- [ ]`` / ``- [x]`` -> to_do
6. bullet item ``-`` / ``*``
7. numbered item ``1.``
8. blockquote (consumes following ``> `` lines) -> callout
9. anything else -> paragraph

Checkbox items are tested before bullets so that ``- [ ] task`` never
becomes a bullet whose text starts with ``[ ]``.  Blank lines only separate
blocks.  Every text field is truncated to the Notion limit before it is
handed to :func:`parse_inline`; code is truncated but never inline-parsed.

Segmentation is total: it never raises, and unrecognised or malformed
constructs fall through to paragraphs.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from notion_importer.converter.languages import normalize_language
from notion_importer.converter.mermaid import inject_mermaid_theme
from notion_importer.converter.rich_text import parse_inline
from notion_importer.models import (
    Block,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Heading,
    NumberedListItem,
    Paragraph,
    RichTextSeq,
    Table,
    ToDo,
)
from notion_importer.utils.text import truncate

FENCE = "```"

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_DIVIDER_RE = re.compile(r"^[-*_]{3,}$")
_CHECKBOX_RE = re.compile(r"^[-*+]\s*\[([ xX])\]\s*(.*)$")
_BULLET_RE = re.compile(r"^[-*]\s+(.*)$")
_NUMBERED_RE = re.compile(r"^\d+\.\s+(.*)$")
_SEPARATOR_HEAD_RE = re.compile(r"^\|[\s:-]+\|")
_SEPARATOR_RE = re.compile(r"^[\s|:-]+$")
QUOTE_MARKER = "> "


def _rich(text: str) -> RichTextSeq:
    return tuple(parse_inline(truncate(text)))


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------

def parse_table_row(line: str) -> list[str]:
    """Split a ``| a | b |`` row into trimmed cell strings.

    The empty fields produced by the outer pipes are discarded.
    """
    return [cell.strip() for cell in line.strip().split("|")[1:-1]]


def is_table_separator(line: str) -> bool:
    """Return whether *line* is a ``|---|:--:|`` header separator row."""
    stripped = line.strip()
    return bool(_SEPARATOR_HEAD_RE.match(stripped) and _SEPARATOR_RE.match(stripped))


# ---------------------------------------------------------------------------
# Line cursor
# ---------------------------------------------------------------------------

class _Cursor:
    """Position within the document's lines."""

    __slots__ = ("lines", "pos")

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def current(self) -> str:
        return self.lines[self.pos].strip()


# Each rule inspects the current (trimmed) line.  On a match it consumes one
# or more lines and returns the produced blocks; otherwise it returns None
# without moving the cursor.
_Rule = Callable[[str, _Cursor], "list[Block] | None"]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _fenced_code(line: str, cur: _Cursor) -> list[Block] | None:
    if not line.startswith(FENCE):
        return None

    tag = line[len(FENCE):].strip()
    body: list[str] = []
    cur.pos += 1
    while not cur.at_end() and not cur.current().startswith(FENCE):
        body.append(cur.lines[cur.pos])
        cur.pos += 1
    cur.pos += 1  # closing fence (past the end when unterminated)

    code = "\n".join(body)
    if tag.lower().split()[:1] == ["mermaid"]:
        code = inject_mermaid_theme(code)
    return [Code(text=truncate(code), language=normalize_language(tag))]


def _heading(line: str, cur: _Cursor) -> list[Block] | None:
    m = _HEADING_RE.match(line)
    if m is None:
        return None
    cur.pos += 1
    level = min(len(m.group(1)), 3)
    return [Heading(level=level, rich_text=_rich(m.group(2).strip()))]


def _divider(line: str, cur: _Cursor) -> list[Block] | None:
    if not _DIVIDER_RE.match(line):
        return None
    cur.pos += 1
    return [Divider()]


def _table(line: str, cur: _Cursor) -> list[Block] | None:
    if not (line.startswith("|") and line.endswith("|")):
        return None

    kept: list[tuple[str, list[str]]] = []
    while not cur.at_end() and cur.current().startswith("|"):
        row_line = cur.current()
        if not is_table_separator(row_line):
            kept.append((row_line, parse_table_row(row_line)))
        cur.pos += 1

    # Leading rows without cells (a bare "|") cannot be a header; keep their
    # text as paragraphs and start the table at the first row with cells.
    leading: list[Block] = []
    while kept and not kept[0][1]:
        leading.append(Paragraph(rich_text=_rich(kept.pop(0)[0])))
    if not kept:
        return leading

    rows = [cells for _, cells in kept]
    header, data = rows[0], rows[1:]
    width = len(header)
    empty_cell = _rich("")

    def build_row(cells: list[str]) -> tuple[RichTextSeq, ...]:
        built = [_rich(cell) for cell in cells[:width]]
        built.extend(empty_cell for _ in range(width - len(built)))
        return tuple(built)

    return [*leading, Table(
        table_width=width,
        rows=(build_row(header), *(build_row(row) for row in data)),
        has_column_header=True,
    )]


def _checkbox(line: str, cur: _Cursor) -> list[Block] | None:
    m = _CHECKBOX_RE.match(line)
    if m is None:
        return None
    cur.pos += 1
    return [ToDo(rich_text=_rich(m.group(2).strip()), checked=m.group(1) in "xX")]


def _bullet(line: str, cur: _Cursor) -> list[Block] | None:
    m = _BULLET_RE.match(line)
    if m is None:
        return None
    cur.pos += 1
    return [BulletedListItem(rich_text=_rich(m.group(1).strip()))]


def _numbered(line: str, cur: _Cursor) -> list[Block] | None:
    m = _NUMBERED_RE.match(line)
    if m is None:
        return None
    cur.pos += 1
    return [NumberedListItem(rich_text=_rich(m.group(1).strip()))]


def _blockquote(line: str, cur: _Cursor) -> list[Block] | None:
    if not line.startswith(QUOTE_MARKER):
        return None

    parts: list[str] = []
    while not cur.at_end() and cur.current().startswith(QUOTE_MARKER):
        parts.append(cur.current()[len(QUOTE_MARKER):].strip())
        cur.pos += 1
    return [Callout(rich_text=_rich("\n".join(parts)))]


def _paragraph(line: str, cur: _Cursor) -> list[Block]:
    cur.pos += 1
    return [Paragraph(rich_text=_rich(line))]


_RULES: tuple[_Rule, ...] = (
    _fenced_code,
    _heading,
    _divider,
    _table,
    _checkbox,
    _bullet,
    _numbered,
    _blockquote,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def segment(markdown: str) -> list[Block]:
    """Convert a Markdown document into an ordered list of blocks.

    Examples
    --------
    >>> [b.type for b in segment("# Title\\n\\n- [x] done\\n---")]
    ['heading_1', 'to_do', 'divider']
    """
    cur = _Cursor(markdown.split("\n"))
    blocks: list[Block] = []

    while not cur.at_end():
        line = cur.current()
        if not line:
            cur.pos += 1
            continue

        for rule in _RULES:
            produced = rule(line, cur)
            if produced is not None:
                break
        else:
            produced = _paragraph(line, cur)
        blocks.extend(produced)

    return blocks
