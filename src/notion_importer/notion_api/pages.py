"""Page API wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import NotionTransport


class PageAPI:
    """Synchronous wrapper for the Notion Pages API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
    ) -> dict[str, Any]:
        """Create a new, empty page.

        Parameters
        ----------
        parent:
            Parent object, e.g. ``{"database_id": "..."}``.
        properties:
            Page properties, including the title property.

        Returns
        -------
        dict
            The created page object as returned by the Notion API.
        """
        body: dict[str, Any] = {
            "parent": parent,
            "properties": properties,
        }
        return self._transport.request("POST", "/pages", json=body)
