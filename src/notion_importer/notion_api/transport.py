"""HTTP transport for the Notion API.

Each request goes through the same lifecycle:

1. Acquire a token-bucket slot (wait if needed).
2. Send the HTTP request with auth and version headers.
3. On ``2xx`` -- return the parsed JSON response.
4. On ``429`` -- honour ``Retry-After`` (or back off) and retry, up to
   ``retry_max_attempts`` attempts in total.
5. On any other status -- raise the matching typed error immediately.
6. On a network failure -- raise :class:`ImporterNetworkError`; writes are
   not replayed because the server may already have applied them.
7. On 429 with attempts exhausted -- raise
   :class:`ImporterRetryExhaustedError`.
"""

from __future__ import annotations

import json as _json
import sys
import time
from collections.abc import Iterator
from typing import Any

import httpx

from notion_importer.config import ImporterConfig
from notion_importer.errors import (
    ImporterAuthError,
    ImporterConflictError,
    ImporterNetworkError,
    ImporterNotFoundError,
    ImporterPermissionError,
    ImporterRetryExhaustedError,
    ImporterServerError,
    ImporterValidationError,
)
from notion_importer.observability import get_logger

from .rate_limit import TokenBucket
from .retries import compute_backoff, should_retry

log = get_logger("notion_importer.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the :class:`ImporterError` subclass matching a failed response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message", response.text[:500])
    notion_code = body.get("code", "")
    context: dict[str, Any] = {"status_code": status, "notion_code": notion_code}

    if status == 401:
        raise ImporterAuthError(
            message=f"Authentication failed on {method} {path}: {notion_message}",
            context=context,
        )
    if status == 403:
        raise ImporterPermissionError(
            message=f"Permission denied on {method} {path}: {notion_message}",
            context={**context, "operation": f"{method} {path}"},
        )
    if status == 404:
        raise ImporterNotFoundError(
            message=f"Resource not found on {method} {path}: {notion_message}",
            context={**context, "path": path},
        )
    if status == 409:
        raise ImporterConflictError(
            message=f"Conflict on {method} {path}: {notion_message}",
            context=context,
        )
    if status >= 500:
        raise ImporterServerError(
            message=f"Server error {status} on {method} {path}: {notion_message}",
            context=context,
        )

    raise ImporterValidationError(
        message=f"HTTP {status} on {method} {path}: {notion_message}",
        context={**context, "body": body},
    )


def _dump_payload(
    method: str,
    url: str,
    payload: dict | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from notion_importer.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, token), indent=2, default=str, ensure_ascii=False),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport with auth, rate limiting, and 429 retries.

    Parameters
    ----------
    config:
        An :class:`ImporterConfig` controlling all transport behaviour.
    """

    def __init__(self, config: ImporterConfig) -> None:
        self._config = config
        self._bucket = TokenBucket(rate_rps=config.rate_limit_rps)
        self._client = httpx.Client(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    # -- public API --------------------------------------------------------

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        **kwargs:
            Forwarded to :meth:`httpx.Client.request` (``json=``,
            ``params=``, ...).

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        ImporterAuthError, ImporterPermissionError, ImporterNotFoundError,
        ImporterConflictError, ImporterServerError, ImporterValidationError
            On the corresponding non-2xx responses.
        ImporterRetryExhaustedError
            When every attempt was rate limited.
        ImporterNetworkError
            When no response was received.
        """
        max_attempts = self._config.retry_max_attempts
        json_payload = kwargs.get("json")

        for attempt in range(max_attempts):
            self._bucket.acquire()

            t0 = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                log.warning(
                    "Request network error",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "attempt": attempt + 1,
                            "error": str(exc),
                        }
                    },
                )
                raise ImporterNetworkError(
                    message=f"Network error on {method} {path}: {exc}",
                    context={"url": path, "attempt": attempt + 1},
                    cause=exc,
                ) from exc

            log.debug(
                "Request completed",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "status_code": response.status_code,
                        "elapsed_ms": round((time.monotonic() - t0) * 1000, 1),
                    }
                },
            )
            self._emit_debug_dump(method, response, json_payload)

            if 200 <= response.status_code < 300:
                if response.status_code == 204 or not response.content:
                    return {}
                result: dict = response.json()
                return result

            if response.status_code != 429:
                _raise_for_status(response, method, path)

            if not should_retry(response.status_code, attempt, max_attempts):
                break

            retry_after = _parse_retry_after(response)
            delay = compute_backoff(
                attempt,
                base=self._config.retry_base_delay,
                maximum=self._config.retry_max_delay,
                jitter=self._config.retry_jitter,
                retry_after=retry_after,
            )
            log.warning(
                "Rate limited by Notion API",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "status_code": 429,
                        "retry_after": retry_after,
                        "delay": delay,
                        "attempt": attempt + 1,
                    }
                },
            )
            time.sleep(delay)

        raise ImporterRetryExhaustedError(
            message=(
                f"All {max_attempts} attempts for {method} {path} were rate limited"
            ),
            context={"attempts": max_attempts, "last_status_code": 429},
        )

    def paginate(self, path: str, **kwargs: Any) -> Iterator[dict]:
        """Auto-paginate a ``GET`` list endpoint, yielding each result item.

        ``page_size`` and ``start_cursor`` are merged into ``params`` until
        the response reports ``has_more: false``.
        """
        params: dict[str, Any] = dict(kwargs.pop("params", None) or {})
        params["page_size"] = 100
        cursor: str | None = None

        while True:
            if cursor is not None:
                params["start_cursor"] = cursor
            data = self.request("GET", path, params=dict(params), **kwargs)
            yield from data.get("results", [])

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- internals ---------------------------------------------------------

    def _emit_debug_dump(
        self,
        method: str,
        response: httpx.Response,
        json_payload: Any,
    ) -> None:
        if not self._config.debug_dump_payload:
            return
        try:
            resp_body = response.json()
        except ValueError:
            resp_body = response.text[:1000]
        _dump_payload(
            method, str(response.url), json_payload,
            response.status_code, resp_body,
            token=self._config.token,
        )
