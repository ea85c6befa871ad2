"""Block API wrapper for the Notion API.

:class:`BlockAPI` is a thin wrapper around the ``/blocks`` endpoints.
``get_children`` auto-paginates to retrieve every child of a block.
"""

from __future__ import annotations

from typing import Any

from .transport import NotionTransport


def extract_block_ids(response: dict[str, Any]) -> list[str]:
    """Extract block IDs from an ``append_children`` API response.

    The IDs are returned in the order the blocks were sent.
    """
    results = response.get("results", [])
    return [r["id"] for r in results if "id" in r]


class BlockAPI:
    """Synchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def delete(self, block_id: str) -> dict[str, Any]:
        """Delete (archive) a block."""
        return self._transport.request("DELETE", f"/blocks/{block_id}")

    def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve all children of a block (or page), auto-paginating."""
        return list(self._transport.paginate(f"/blocks/{block_id}/children"))

    def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Append child blocks to a parent block or page.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page) to append to.
        children:
            Block payloads to append.  Notion accepts a maximum of 100 per
            call; the uploader batches with
            :func:`notion_importer.utils.chunk_children`.

        Returns
        -------
        dict
            The API response; ``results`` lists the created blocks in order.
        """
        return self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )
