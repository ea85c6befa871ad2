"""Batch a sequence of blocks into groups of at most *size* items.

The Notion ``append_block_children`` endpoint accepts a maximum of 100 blocks
per request; the uploader sends one batch per request, in order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def chunk_children(items: Sequence[T], size: int = 100) -> list[list[T]]:
    """Split *items* into consecutive batches of at most *size*.

    An empty input returns an empty list (not ``[[]]``).

    Raises
    ------
    ValueError
        If *size* is less than 1.

    Examples
    --------
    >>> [len(b) for b in chunk_children(list(range(250)))]
    [100, 100, 50]
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    if not items:
        return []

    return [list(items[i : i + size]) for i in range(0, len(items), size)]
