"""Token redaction for debug dumps.

Request/response dumps written with ``debug_dump_payload`` pass through
:func:`redact` first:

* Values under credential-like keys (``authorization``, ``token``, ...) are
  masked, keeping at most the last four characters of a known token.
* The integration token is scrubbed from every string value in the tree.
* ``Bearer <token>`` fragments are masked even when the token is unknown.
"""

from __future__ import annotations

import re
from typing import Any

# Substrings: if any of these appear in a key name (case-insensitive), the
# value is redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "api_key",
    "api-key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask_token(value: str, token: str | None) -> str:
    """Replace bearer / token strings with a safe placeholder."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 8 else "****"
        value = value.replace(token, f"<redacted:...{suffix}>")
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return redact(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        return _mask_token(value, token)
    return value


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a copy of *payload* with credentials removed.

    The input is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer secret_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    >>> redact({"note": "key=secret_abc123"}, token="secret_abc123")
    {'note': 'key=<redacted:...c123>'}
    """
    result: dict = {}
    for key, value in payload.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                masked = _mask_token(value, token)
                result[key] = masked if masked != value else "<redacted>"
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result
