"""Retry decision logic and backoff computation.

Only rate limiting (HTTP 429) is retried.  Every other non-2xx response and
every network failure is terminal, so a failed write is never silently
repeated.

* :func:`should_retry` -- decide whether a response warrants another attempt.
* :func:`compute_backoff` -- delay before the next attempt.
"""

from __future__ import annotations

import random

RETRYABLE_STATUSES: frozenset[int] = frozenset({429})


def should_retry(status_code: int | None, attempt: int, max_attempts: int) -> bool:
    """Decide whether a request should be retried.

    Parameters
    ----------
    status_code:
        HTTP status code from the response, or ``None`` if no response was
        received.
    attempt:
        The current attempt number (0-indexed).
    max_attempts:
        Maximum total attempts allowed (including the initial request).
    """
    if attempt + 1 >= max_attempts:
        return False
    return status_code in RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Compute the delay before the next retry attempt.

    A server-provided ``Retry-After`` value is used directly (capped at
    *maximum*); otherwise the delay is ``base * 2^attempt`` capped at
    *maximum*.  With *jitter* the delay is scaled to 50-100 % of its value.
    """
    if retry_after is not None and retry_after >= 0:
        delay = min(retry_after, maximum)
    else:
        delay = min(base * (2 ** attempt), maximum)

    if jitter:
        delay *= 0.5 + random.random() * 0.5

    return delay
