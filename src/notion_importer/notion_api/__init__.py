"""notion_importer.notion_api -- Notion API transport and endpoint wrappers.

* :mod:`.rate_limit` -- token bucket rate limiter.
* :mod:`.retries` -- 429 retry decision and backoff.
* :mod:`.transport` -- HTTP transport with auth, retries, and rate limiting.
* :mod:`.pages` -- page creation.
* :mod:`.blocks` -- block children listing, appending and deletion.
"""

from __future__ import annotations

from .blocks import BlockAPI, extract_block_ids
from .pages import PageAPI
from .rate_limit import TokenBucket
from .retries import compute_backoff, should_retry
from .transport import NotionTransport

__all__ = [
    "BlockAPI",
    "NotionTransport",
    "PageAPI",
    "TokenBucket",
    "compute_backoff",
    "extract_block_ids",
    "should_retry",
]
