"""Importer configuration.

:class:`ImporterConfig` is a dataclass that captures every tuneable knob of
the converter and the uploader.  :class:`TocOptions` controls the
table-of-contents injection step.  :func:`load_api_key` resolves the Notion
integration token from the environment or the key file.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path

from notion_importer.errors import ImporterAuthFileMissingError

DEFAULT_API_KEY_PATH = Path("~/.config/notion/api_key")
"""Where the integration token is read from when the environment is empty."""

API_KEY_ENV_VAR = "NOTION_API_KEY"

# Newer API versions change block semantics silently; pin the known-good one.
DEFAULT_NOTION_VERSION = "2022-06-28"

MAX_BATCH_SIZE = 100
"""Notion accepts at most 100 children per ``append_block_children`` call."""


@dataclass(frozen=True)
class TocOptions:
    """Table-of-contents injection settings.

    Parameters
    ----------
    enabled:
        When ``False`` the block sequence is returned unchanged.
    min_headings:
        Minimum number of heading blocks required to prepend the TOC.
    force:
        Prepend the TOC regardless of the heading count.
    """

    enabled: bool = True
    min_headings: int = 3
    force: bool = False


@dataclass
class ImporterConfig:
    """Complete configuration for a conversion / upload run.

    Every parameter has a default so that the only value needed for
    uploading is ``token``; conversion alone needs none.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    batch_size:
        Blocks per ``append_block_children`` call (1-100).
    batch_delay:
        Seconds to wait between consecutive batches.
    child_delay:
        Seconds to wait after attaching pending children to a block.
    delete_delay:
        Seconds to wait between block deletions in replace mode.
    retry_max_attempts:
        Total attempts (initial request included) for rate-limited requests.
    retry_base_delay:
        Base delay (seconds) for exponential backoff after a 429.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Randomly scale backoff intervals to 50-100 % of their value.
    rate_limit_rps:
        Target requests per second for client-side pacing.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    toc:
        Table-of-contents injection settings.
    debug_dump_payload:
        Write the block payload and every request/response (redacted) to
        *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = DEFAULT_NOTION_VERSION

    base_url: str = "https://api.notion.com/v1"

    # ── Upload pacing ───────────────────────────────────────────────────
    batch_size: int = MAX_BATCH_SIZE

    batch_delay: float = 0.4

    child_delay: float = 0.2

    delete_delay: float = 0.1

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 4

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Conversion ──────────────────────────────────────────────────────
    toc: TocOptions = field(default_factory=TocOptions)

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if not 1 <= self.batch_size <= MAX_BATCH_SIZE:
            raise ValueError(
                f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {self.batch_size}"
            )
        for name in ("batch_delay", "child_delay", "delete_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.toc.min_headings < 0:
            raise ValueError(f"toc.min_headings must be >= 0, got {self.toc.min_headings}")

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"ImporterConfig({', '.join(parts)})"


def load_api_key(path: str | Path | None = None) -> str:
    """Resolve the Notion integration token.

    An explicit *path* wins; otherwise ``NOTION_API_KEY`` is consulted
    before the default key file.

    Raises
    ------
    ImporterAuthFileMissingError
        If no non-empty token can be found.
    """
    if path is None:
        env_token = os.environ.get(API_KEY_ENV_VAR, "").strip()
        if env_token:
            return env_token
        path = DEFAULT_API_KEY_PATH

    key_file = Path(path).expanduser()
    try:
        token = key_file.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ImporterAuthFileMissingError(
            message=f"Notion API key not found: {key_file} (or set {API_KEY_ENV_VAR})",
            context={"path": str(key_file), "env_var": API_KEY_ENV_VAR},
            cause=exc,
        ) from exc

    if not token:
        raise ImporterAuthFileMissingError(
            message=f"Notion API key file is empty: {key_file}",
            context={"path": str(key_file), "env_var": API_KEY_ENV_VAR},
        )
    return token
