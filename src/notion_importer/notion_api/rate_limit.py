"""Token-bucket rate limiter for client-side pacing.

Tokens are replenished at a fixed *rate* (tokens per second) up to a *burst*
ceiling.  A caller requesting more tokens than are available sleeps for the
deficit before proceeding.
"""

from __future__ import annotations

import threading
import time


class TokenBucket:
    """Thread-safe token bucket.

    Parameters
    ----------
    rate_rps:
        Sustained token-refill rate in tokens per second.
    burst:
        Maximum number of tokens the bucket can hold.
    """

    __slots__ = ("_lock", "burst", "last_refill", "rate", "tokens")

    def __init__(self, rate_rps: float, burst: int = 3) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")

        self.rate: float = rate_rps
        self.burst: int = burst
        self.tokens: float = float(burst)
        self.last_refill: float = time.monotonic()
        self._lock = threading.Lock()

    def acquire(self, tokens: int = 1) -> float:
        """Take *tokens* from the bucket, sleeping if necessary.

        Returns the number of seconds waited (``0.0`` when tokens were
        immediately available).
        """
        with self._lock:
            now = time.monotonic()
            self.tokens = min(self.burst, self.tokens + (now - self.last_refill) * self.rate)
            self.last_refill = now

            if self.tokens >= tokens:
                self.tokens -= tokens
                return 0.0

            # Go into debt so the sleep below pays for these tokens.
            wait = (tokens - self.tokens) / self.rate
            self.tokens -= tokens

        time.sleep(wait)
        return wait
