"""Sequential block uploader.

:class:`NotionUploader` sends converted blocks to a page in batches of at
most 100, one request at a time and in document order: the API gives no
ordering guarantee for concurrent appends to the same parent.

Blocks with ``pending_children`` are sent without them; right after the
batch is accepted, the children are appended to the ID the API assigned to
the parent.  A failed request aborts the upload.  Batches already accepted
stay on the page; nothing is rolled back.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from notion_importer.config import ImporterConfig
from notion_importer.converter.md_to_notion import blocks_to_payload
from notion_importer.errors import ImporterVerificationError
from notion_importer.models import Block, UploadResult
from notion_importer.notion_api.blocks import BlockAPI, extract_block_ids
from notion_importer.notion_api.pages import PageAPI
from notion_importer.notion_api.transport import NotionTransport
from notion_importer.observability import get_logger
from notion_importer.utils.chunk import chunk_children

log = get_logger("notion_importer.uploader")


def page_url(page_id: str) -> str:
    """Browser URL for *page_id*."""
    return f"https://notion.so/{page_id.replace('-', '')}"


def title_property(title: str) -> dict[str, Any]:
    """The ``Name`` title property for a new database entry."""
    return {"Name": {"title": [{"text": {"content": title}}]}}


class NotionUploader:
    """Upload block records to Notion.

    Parameters
    ----------
    config:
        Importer configuration (token, pacing, retries).
    transport:
        Optional pre-built transport; one is created from *config* when
        omitted and closed by :meth:`close`.
    """

    def __init__(
        self,
        config: ImporterConfig,
        transport: NotionTransport | None = None,
    ) -> None:
        self._config = config
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else NotionTransport(config)
        self.blocks = BlockAPI(self._transport)
        self.pages = PageAPI(self._transport)

    # -- context manager ---------------------------------------------------

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> NotionUploader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- uploading ---------------------------------------------------------

    def upload_blocks(self, parent_id: str, blocks: Sequence[Block]) -> tuple[int, int]:
        """Append *blocks* to *parent_id*, attaching pending children.

        Returns
        -------
        tuple[int, int]
            ``(blocks_uploaded, children_attached)``.
        """
        batches = chunk_children(blocks, self._config.batch_size)
        uploaded = 0
        attached = 0

        for number, batch in enumerate(batches, start=1):
            log.info(
                "Uploading batch",
                extra={
                    "extra_fields": {
                        "op": "upload_blocks",
                        "batch": number,
                        "batches": len(batches),
                        "blocks": len(batch),
                    }
                },
            )
            response = self.blocks.append_children(parent_id, blocks_to_payload(batch))
            uploaded += len(batch)
            attached += self._attach_pending_children(batch, extract_block_ids(response))

            if number < len(batches):
                time.sleep(self._config.batch_delay)

        return uploaded, attached

    def _attach_pending_children(self, batch: Sequence[Block], ids: list[str]) -> int:
        attached = 0
        for index, block in enumerate(batch):
            if not block.pending_children:
                continue
            if index >= len(ids):
                log.warning(
                    "No block ID returned for a block with pending children",
                    extra={"extra_fields": {"op": "attach_children", "index": index}},
                )
                continue
            children = blocks_to_payload(block.pending_children)
            log.info(
                "Attaching child blocks",
                extra={
                    "extra_fields": {
                        "op": "attach_children",
                        "block_id": ids[index],
                        "children": len(children),
                    }
                },
            )
            self.blocks.append_children(ids[index], children)
            attached += len(children)
            time.sleep(self._config.child_delay)
        return attached

    def delete_all_children(self, page_id: str) -> int:
        """Delete every existing child block of *page_id*.  Returns the count."""
        existing = self.blocks.get_children(page_id)
        log.info(
            "Deleting existing content",
            extra={"extra_fields": {"op": "delete_children", "blocks": len(existing)}},
        )
        for block in existing:
            self.blocks.delete(block["id"])
            time.sleep(self._config.delete_delay)
        return len(existing)

    def verify_upload(self, page_id: str, expected: int) -> int:
        """Check that *page_id* has at least *expected* child blocks.

        Returns the actual count.

        Raises
        ------
        ImporterVerificationError
            If fewer blocks than expected are present.
        """
        actual = len(self.blocks.get_children(page_id))
        if actual < expected:
            raise ImporterVerificationError(
                message=(
                    f"Upload verification failed for {page_id}: "
                    f"expected at least {expected} blocks, found {actual}"
                ),
                context={
                    "page_id": page_id,
                    "expected": expected,
                    "actual": actual,
                    "url": page_url(page_id),
                },
            )
        return actual

    # -- high-level operations ---------------------------------------------

    def upload_to_page(
        self,
        page_id: str,
        blocks: Sequence[Block],
        *,
        replace: bool = False,
    ) -> UploadResult:
        """Append *blocks* to an existing page, optionally clearing it first."""
        if replace:
            self.delete_all_children(page_id)

        uploaded, attached = self.upload_blocks(page_id, blocks)
        self.verify_upload(page_id, uploaded)

        log.info(
            "Page updated",
            extra={
                "extra_fields": {
                    "op": "upload_to_page",
                    "page_id": page_id,
                    "blocks": uploaded,
                    "replaced": replace,
                }
            },
        )
        return UploadResult(
            page_id=page_id,
            url=page_url(page_id),
            blocks_uploaded=uploaded,
            children_attached=attached,
            replaced=replace,
        )

    def create_in_database(
        self,
        database_id: str,
        title: str,
        blocks: Sequence[Block],
        properties: dict[str, Any] | None = None,
    ) -> UploadResult:
        """Create a page titled *title* in *database_id* and upload *blocks*.

        *properties* are merged over the generated ``Name`` title property.
        """
        page = self.pages.create(
            parent={"database_id": database_id},
            properties={**title_property(title), **(properties or {})},
        )
        page_id = page["id"]
        log.info(
            "Page created",
            extra={"extra_fields": {"op": "create_in_database", "page_id": page_id}},
        )

        uploaded, attached = self.upload_blocks(page_id, blocks)
        self.verify_upload(page_id, uploaded)

        return UploadResult(
            page_id=page_id,
            url=page_url(page_id),
            blocks_uploaded=uploaded,
            children_attached=attached,
        )
