"""notion_importer -- Markdown to Notion block converter and uploader.

Public re-exports
-----------------

* **Conversion:** :class:`MarkdownToNotionConverter`, :func:`segment`,
  :func:`parse_inline`, :func:`add_table_of_contents`
* **Upload:** :class:`NotionUploader`
* **Configuration:** :class:`ImporterConfig`, :class:`TocOptions`
* **Errors:** Every :class:`ImporterError` subclass and :class:`ErrorCode`
* **Models:** Block records, rich text and result dataclasses

Usage::

    from notion_importer import ImporterConfig, MarkdownToNotionConverter

    result = MarkdownToNotionConverter(ImporterConfig()).convert("# Hello")
"""

from __future__ import annotations

__version__ = "0.1.0"

# ── Configuration ───────────────────────────────────────────────────────
from notion_importer.config import ImporterConfig, TocOptions, load_api_key

# ── Conversion ──────────────────────────────────────────────────────────
from notion_importer.converter import (
    MarkdownToNotionConverter,
    add_table_of_contents,
    blocks_to_payload,
    parse_inline,
    segment,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notion_importer.errors import (
    ErrorCode,
    ImporterAuthError,
    ImporterAuthFileMissingError,
    ImporterConfigError,
    ImporterConflictError,
    ImporterError,
    ImporterNetworkError,
    ImporterNotFoundError,
    ImporterPermissionError,
    ImporterRetryExhaustedError,
    ImporterServerError,
    ImporterValidationError,
    ImporterVerificationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notion_importer.models import (
    Annotations,
    Block,
    BlockKind,
    BulletedListItem,
    Callout,
    Code,
    ConversionResult,
    Divider,
    Heading,
    NumberedListItem,
    Paragraph,
    RichText,
    Table,
    TableOfContents,
    ToDo,
    UploadResult,
)

# ── Upload ──────────────────────────────────────────────────────────────
from notion_importer.uploader import NotionUploader

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    "__version__",
    # Configuration
    "ImporterConfig",
    "TocOptions",
    "load_api_key",
    # Conversion
    "MarkdownToNotionConverter",
    "segment",
    "parse_inline",
    "add_table_of_contents",
    "blocks_to_payload",
    # Upload
    "NotionUploader",
    # Errors
    "ImporterError",
    "ErrorCode",
    "ImporterValidationError",
    "ImporterAuthError",
    "ImporterAuthFileMissingError",
    "ImporterConfigError",
    "ImporterPermissionError",
    "ImporterNotFoundError",
    "ImporterConflictError",
    "ImporterServerError",
    "ImporterRetryExhaustedError",
    "ImporterNetworkError",
    "ImporterVerificationError",
    # Models: blocks
    "Block",
    "BlockKind",
    "Heading",
    "Paragraph",
    "BulletedListItem",
    "NumberedListItem",
    "ToDo",
    "Code",
    "Table",
    "Callout",
    "Divider",
    "TableOfContents",
    # Models: rich text
    "RichText",
    "Annotations",
    # Models: results
    "ConversionResult",
    "UploadResult",
]
