"""Table-of-contents injection.

Notion's ``table_of_contents`` block lists every heading on the page.  It
is placed inside a collapsible "Contents" heading so it can be folded away;
because the API only accepts a heading's children once the heading exists,
the TOC block travels as the heading's ``pending_children``.
"""

from __future__ import annotations

from collections.abc import Sequence

from notion_importer.config import TocOptions
from notion_importer.models import (
    HEADING_KINDS,
    Block,
    Divider,
    Heading,
    RichText,
    TableOfContents,
)

TOC_TITLE = "Contents"


def count_headings(blocks: Sequence[Block]) -> int:
    """Number of heading_1/2/3 blocks in *blocks*."""
    return sum(1 for block in blocks if block.kind in HEADING_KINDS)


def toc_blocks() -> list[Block]:
    """The toggleable "Contents" heading and the divider that follows it."""
    toggle = Heading(
        level=2,
        rich_text=(RichText(TOC_TITLE),),
        is_toggleable=True,
        pending_children=(TableOfContents(),),
    )
    return [toggle, Divider()]


def add_table_of_contents(
    blocks: Sequence[Block],
    options: TocOptions | None = None,
) -> list[Block]:
    """Prepend the TOC heading and a divider when *options* call for it.

    The TOC is added when ``options.enabled`` is set and either
    ``options.force`` is set or the document has at least
    ``options.min_headings`` headings.  Otherwise *blocks* is returned
    unchanged (as a new list).
    """
    if options is None:
        options = TocOptions()

    if not options.enabled:
        return list(blocks)

    if not options.force and count_headings(blocks) < options.min_headings:
        return list(blocks)

    return [*toc_blocks(), *blocks]
