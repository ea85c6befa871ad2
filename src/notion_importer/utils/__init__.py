from .chunk import chunk_children
from .redact import redact
from .text import ELLIPSIS, TEXT_LIMIT, truncate

__all__ = [
    "ELLIPSIS",
    "TEXT_LIMIT",
    "chunk_children",
    "redact",
    "truncate",
]
