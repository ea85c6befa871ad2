"""Command-line entry point: ``notion-import`` / ``python -m notion_importer``.

Examples
--------
Upload into a database (title defaults to the file name)::

    notion-import notes.md --database 5df03450e00947eb94401bca190f835c

Replace the content of an existing page::

    notion-import notes.md --page 2f1c... --replace

Convert only and print the block payload::

    notion-import notes.md --dump
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from notion_importer import __version__
from notion_importer.config import (
    API_KEY_ENV_VAR,
    ImporterConfig,
    TocOptions,
    load_api_key,
)
from notion_importer.converter.md_to_notion import (
    MarkdownToNotionConverter,
    blocks_to_payload,
)
from notion_importer.errors import ImporterConfigError, ImporterError
from notion_importer.models import ConversionResult, UploadResult
from notion_importer.observability import configure_logging, get_logger
from notion_importer.uploader import NotionUploader
from notion_importer.utils.chunk import chunk_children

EXIT_SUCCESS = 0
EXIT_IMPORT_ERROR = 1
EXIT_USAGE_ERROR = 2

DATABASE_ENV_VAR = "NOTION_DATABASE_ID"

log = get_logger("notion_importer.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-import",
        description="Convert a Markdown file to Notion blocks and upload it.",
        epilog=(
            f"The API key is read from ${API_KEY_ENV_VAR} or "
            "~/.config/notion/api_key. The database defaults to "
            f"${DATABASE_ENV_VAR}."
        ),
    )
    parser.add_argument("file", help="Markdown file to import")

    target = parser.add_mutually_exclusive_group()
    target.add_argument("--page", metavar="PAGE_ID", help="Append to an existing page")
    target.add_argument(
        "--database",
        metavar="DATABASE_ID",
        default=os.environ.get(DATABASE_ENV_VAR),
        help="Create a new page in this database",
    )

    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete the page's existing content first (with --page)",
    )
    parser.add_argument("--title", help="Page title (default: file name without extension)")
    parser.add_argument(
        "--properties",
        metavar="JSON",
        help="Extra database properties as a JSON object",
    )

    toc = parser.add_mutually_exclusive_group()
    toc.add_argument(
        "--toc",
        action="store_true",
        help="Always add a table of contents",
    )
    toc.add_argument(
        "--no-toc",
        action="store_true",
        help="Never add a table of contents",
    )
    parser.add_argument(
        "--toc-min",
        type=int,
        default=TocOptions.min_headings,
        metavar="N",
        help="Minimum headings for an automatic table of contents (default: %(default)s)",
    )

    parser.add_argument(
        "--api-key-file",
        type=Path,
        metavar="PATH",
        help="Read the integration token from PATH",
    )
    parser.add_argument(
        "--dump",
        nargs="?",
        const="-",
        metavar="PATH",
        help="Convert only and write the block payload as JSON ('-' for stdout)",
    )
    parser.add_argument(
        "--debug-dump",
        action="store_true",
        help="Write redacted block and API payloads to stderr",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _parse_properties(raw: str | None) -> dict[str, Any]:
    if raw is None:
        return {}
    context = {"field": "--properties", "value": raw}
    try:
        properties = json.loads(raw)
    except ValueError as exc:
        raise ImporterConfigError(
            message=f"--properties is not valid JSON: {exc}", context=context, cause=exc,
        ) from exc
    if not isinstance(properties, dict):
        raise ImporterConfigError(message="--properties must be a JSON object", context=context)
    return properties


def _write_dump(result: ConversionResult, destination: str) -> None:
    text = json.dumps(blocks_to_payload(result.blocks), indent=2, ensure_ascii=False)
    if destination == "-":
        print(text)
    else:
        Path(destination).write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(result.blocks)} blocks to {destination}")


def _report(result: UploadResult) -> None:
    verb = "Replaced content with" if result.replaced else "Uploaded"
    print(f"{verb} {result.blocks_uploaded} blocks")
    print(f"View at: {result.url}")


def main(argv: list[str] | None = None) -> int:
    """Run the importer and return the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_SUCCESS

    configure_logging("DEBUG" if args.verbose else "WARNING")

    if args.replace and not args.page:
        print("Error: --replace requires --page", file=sys.stderr)
        return EXIT_USAGE_ERROR

    source = Path(args.file)
    try:
        markdown = source.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read {source}: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        properties = _parse_properties(args.properties)
    except ImporterConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.toc_min < 0:
        print(f"Error: --toc-min must be >= 0, got {args.toc_min}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    toc = TocOptions(enabled=not args.no_toc, min_headings=args.toc_min, force=args.toc)
    converter = MarkdownToNotionConverter(
        ImporterConfig(toc=toc, debug_dump_payload=args.debug_dump)
    )
    result = converter.convert(markdown)

    if args.dump is not None:
        try:
            _write_dump(result, args.dump)
        except OSError as exc:
            print(f"Error: cannot write {args.dump}: {exc}", file=sys.stderr)
            return EXIT_USAGE_ERROR
        return EXIT_SUCCESS

    if not args.page and not args.database:
        print(
            f"Error: no target; pass --page, --database or set {DATABASE_ENV_VAR}",
            file=sys.stderr,
        )
        return EXIT_USAGE_ERROR

    print(f"Read {source}: {markdown.count(chr(10)) + 1} lines")
    print(f"Converted to {len(result.blocks)} Notion blocks")
    if result.toc_added:
        print(f"Added table of contents ({result.heading_count} headings)")
    try:
        config = ImporterConfig(
            token=load_api_key(args.api_key_file),
            toc=toc,
            debug_dump_payload=args.debug_dump,
        )
        batches = chunk_children(result.blocks, config.batch_size)
        print(f"Uploading in {len(batches)} batch(es)")
        with NotionUploader(config) as uploader:
            if args.page:
                upload = uploader.upload_to_page(args.page, result.blocks, replace=args.replace)
            else:
                upload = uploader.create_in_database(
                    args.database,
                    args.title or source.stem,
                    result.blocks,
                    properties,
                )
    except ImporterError as exc:
        log.debug("import failed", extra={"extra_fields": {"code": exc.code}})
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_IMPORT_ERROR

    _report(upload)
    return EXIT_SUCCESS
