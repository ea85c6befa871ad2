"""Length limits for Notion text fields.

Notion's ``rich_text[].text.content`` field is limited to 2 000 characters.
Text longer than that is cut *before* it is parsed into runs, so a single
field never produces runs whose combined content exceeds the limit.

Python ``str`` slicing works on code-points, so truncation never bisects a
multi-byte character.
"""

from __future__ import annotations

TEXT_LIMIT = 2000
"""Maximum characters per Notion rich_text content field."""

ELLIPSIS = "..."


def truncate(text: str | None, limit: int = TEXT_LIMIT) -> str:
    """Cut *text* to at most *limit* characters, ending in ``"..."``.

    Text that already fits is returned unchanged, which makes the function
    idempotent.  ``None`` and the empty string both yield ``""``.

    Raises
    ------
    ValueError
        If *limit* is too small to hold the ellipsis marker.

    Examples
    --------
    >>> truncate("hello", 10)
    'hello'
    >>> truncate("hello world", 8)
    'hello...'
    >>> len(truncate("x" * 5000))
    2000
    """
    if limit < len(ELLIPSIS):
        raise ValueError(f"limit must be >= {len(ELLIPSIS)}, got {limit}")

    if not text:
        return ""

    if len(text) <= limit:
        return text

    return text[: limit - len(ELLIPSIS)] + ELLIPSIS
