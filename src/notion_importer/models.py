"""Value records produced by the converter and consumed by the uploader.

Every type here is a frozen dataclass: a conversion builds each record
once and nothing mutates it afterwards.  Blocks are a small tagged family
sharing the :class:`Block` base; :meth:`Block.to_dict` renders the JSON
payload expected by the Notion ``append_block_children`` endpoint.

A block may carry ``pending_children``: blocks that can only be attached
after the parent has been created remotely, because the API assigns the
parent's ID on creation.  The attachment is never part of the payload; the
uploader reads it separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockKind(str, Enum):
    """Block discriminator, valued with the Notion API ``type`` string."""

    HEADING1 = "heading_1"
    HEADING2 = "heading_2"
    HEADING3 = "heading_3"
    PARAGRAPH = "paragraph"
    BULLETED_ITEM = "bulleted_list_item"
    NUMBERED_ITEM = "numbered_list_item"
    TODO_ITEM = "to_do"
    CODE = "code"
    TABLE = "table"
    QUOTE_CALLOUT = "callout"
    DIVIDER = "divider"
    TABLE_OF_CONTENTS = "table_of_contents"


HEADING_KINDS: frozenset[BlockKind] = frozenset({
    BlockKind.HEADING1,
    BlockKind.HEADING2,
    BlockKind.HEADING3,
})


# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Boolean style flags attached to a run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False

    def merged(self, **flags: bool) -> Annotations:
        """Return a copy with *flags* OR-merged into the current values."""
        values = {
            name: getattr(self, name) or flags.get(name, False)
            for name in ("bold", "italic", "strikethrough", "code")
        }
        return Annotations(**values)

    def any(self) -> bool:
        return self.bold or self.italic or self.strikethrough or self.code

    def to_dict(self) -> dict[str, bool]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "code": self.code,
        }


PLAIN = Annotations()


@dataclass(frozen=True)
class RichText:
    """A contiguous span of text sharing one annotation set and link."""

    content: str
    link: str | None = None
    annotations: Annotations = PLAIN

    def with_annotations(self, **flags: bool) -> RichText:
        return RichText(
            content=self.content,
            link=self.link,
            annotations=self.annotations.merged(**flags),
        )

    def to_dict(self) -> dict[str, Any]:
        """Render as a Notion rich_text text segment."""
        text: dict[str, Any] = {"content": self.content}
        if self.link:
            text["link"] = {"url": self.link}
        seg: dict[str, Any] = {"type": "text", "text": text}
        # Only include annotations if any are set
        if self.annotations.any():
            seg["annotations"] = self.annotations.to_dict()
        return seg


RichTextSeq = tuple[RichText, ...]


def _rich_text_payload(runs: RichTextSeq) -> list[dict[str, Any]]:
    return [run.to_dict() for run in runs]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Block:
    """Base for every block record."""

    kind: ClassVar[BlockKind]

    pending_children: tuple[Block, ...] = field(default=(), kw_only=True)

    @property
    def type(self) -> str:
        return self.kind.value

    def _body(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Render the API payload.  ``pending_children`` is never included."""
        return {
            "object": "block",
            "type": self.type,
            self.type: self._body(),
        }


@dataclass(frozen=True)
class Heading(Block):
    """heading_1 / heading_2 / heading_3.  ``level`` is clamped to 1-3."""

    level: int
    rich_text: RichTextSeq
    is_toggleable: bool = False

    @property
    def kind(self) -> BlockKind:  # type: ignore[override]
        return (BlockKind.HEADING1, BlockKind.HEADING2, BlockKind.HEADING3)[
            min(max(self.level, 1), 3) - 1
        ]

    def _body(self) -> dict[str, Any]:
        return {
            "rich_text": _rich_text_payload(self.rich_text),
            "is_toggleable": self.is_toggleable,
        }


@dataclass(frozen=True)
class Paragraph(Block):
    kind: ClassVar[BlockKind] = BlockKind.PARAGRAPH

    rich_text: RichTextSeq

    def _body(self) -> dict[str, Any]:
        return {"rich_text": _rich_text_payload(self.rich_text)}


@dataclass(frozen=True)
class BulletedListItem(Block):
    kind: ClassVar[BlockKind] = BlockKind.BULLETED_ITEM

    rich_text: RichTextSeq

    def _body(self) -> dict[str, Any]:
        return {"rich_text": _rich_text_payload(self.rich_text)}


@dataclass(frozen=True)
class NumberedListItem(Block):
    kind: ClassVar[BlockKind] = BlockKind.NUMBERED_ITEM

    rich_text: RichTextSeq

    def _body(self) -> dict[str, Any]:
        return {"rich_text": _rich_text_payload(self.rich_text)}


@dataclass(frozen=True)
class ToDo(Block):
    kind: ClassVar[BlockKind] = BlockKind.TODO_ITEM

    rich_text: RichTextSeq
    checked: bool = False

    def _body(self) -> dict[str, Any]:
        return {
            "rich_text": _rich_text_payload(self.rich_text),
            "checked": self.checked,
        }


@dataclass(frozen=True)
class Code(Block):
    """Fenced code.  ``text`` is literal; it is never inline-parsed."""

    kind: ClassVar[BlockKind] = BlockKind.CODE

    text: str
    language: str = "plain text"

    def _body(self) -> dict[str, Any]:
        return {
            "rich_text": [RichText(self.text).to_dict()],
            "language": self.language,
        }


@dataclass(frozen=True)
class Table(Block):
    """A rectangular grid; the first row is the header when flagged.

    Every row holds exactly ``table_width`` cells.
    """

    kind: ClassVar[BlockKind] = BlockKind.TABLE

    table_width: int
    rows: tuple[tuple[RichTextSeq, ...], ...]
    has_column_header: bool = True

    def _body(self) -> dict[str, Any]:
        return {
            "table_width": self.table_width,
            "has_column_header": self.has_column_header,
            "has_row_header": False,
            "children": [
                {
                    "type": "table_row",
                    "table_row": {
                        "cells": [_rich_text_payload(cell) for cell in row],
                    },
                }
                for row in self.rows
            ],
        }


@dataclass(frozen=True)
class Callout(Block):
    """Blockquote rendered as a callout with a fixed glyph."""

    kind: ClassVar[BlockKind] = BlockKind.QUOTE_CALLOUT

    rich_text: RichTextSeq
    emoji: str = "\U0001f4a1"

    def _body(self) -> dict[str, Any]:
        return {
            "rich_text": _rich_text_payload(self.rich_text),
            "icon": {"type": "emoji", "emoji": self.emoji},
        }


@dataclass(frozen=True)
class Divider(Block):
    kind: ClassVar[BlockKind] = BlockKind.DIVIDER


@dataclass(frozen=True)
class TableOfContents(Block):
    kind: ClassVar[BlockKind] = BlockKind.TABLE_OF_CONTENTS


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ConversionResult:
    """Output of :meth:`MarkdownToNotionConverter.convert`.

    Attributes
    ----------
    blocks:
        Converted blocks in document order, TOC included when added.
    heading_count:
        Number of heading blocks in the converted document.
    toc_added:
        Whether the table-of-contents heading and divider were prepended.
    """

    blocks: list[Block] = field(default_factory=list)
    heading_count: int = 0
    toc_added: bool = False


@dataclass
class UploadResult:
    """Result of an upload to a page or a new database entry.

    Attributes
    ----------
    page_id:
        The target page ID.
    url:
        Browser URL of the page.
    blocks_uploaded:
        Number of top-level blocks appended.
    children_attached:
        Number of pending child blocks attached after their parents.
    replaced:
        Whether existing page content was deleted first.
    """

    page_id: str
    url: str
    blocks_uploaded: int
    children_attached: int = 0
    replaced: bool = False
