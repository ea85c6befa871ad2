"""Markdown to Notion conversion.

Public API:

- :class:`MarkdownToNotionConverter` -- Markdown -> blocks, TOC included.
- :func:`segment` -- split a document into block records.
- :func:`parse_inline` -- parse inline Markdown into rich text runs.
- :func:`normalize_language` -- map a fence tag to a Notion language.
- :func:`inject_mermaid_theme` -- theme an un-themed Mermaid diagram.
- :func:`add_table_of_contents` -- prepend the collapsible TOC heading.
"""

from notion_importer.converter.languages import normalize_language
from notion_importer.converter.md_to_notion import MarkdownToNotionConverter, blocks_to_payload
from notion_importer.converter.mermaid import inject_mermaid_theme
from notion_importer.converter.rich_text import parse_inline
from notion_importer.converter.segmenter import segment
from notion_importer.converter.toc import add_table_of_contents

__all__ = [
    "MarkdownToNotionConverter",
    "add_table_of_contents",
    "blocks_to_payload",
    "inject_mermaid_theme",
    "normalize_language",
    "parse_inline",
    "segment",
]
