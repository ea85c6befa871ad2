"""Error hierarchy for notion_importer.

The Markdown converter never raises: malformed input degrades to plainer
blocks.  Every other failure (missing credentials, HTTP errors, upload
verification) is reported as an :class:`ImporterError` subclass carrying a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the importer can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    AUTH_FILE_MISSING = "AUTH_FILE_MISSING"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    SERVER_ERROR = "SERVER_ERROR"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"
    CONFIG_ERROR = "CONFIG_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class ImporterError(Exception):
    """Base exception for all notion_importer errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class _CodedError(ImporterError):
    """Subclass helper: fixes ``code`` from the class attribute."""

    code_value: ErrorCode

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=self.code_value,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Configuration / credential errors
# ---------------------------------------------------------------------------

class ImporterConfigError(_CodedError):
    """A configuration value or CLI argument is invalid.

    Context keys: ``field``, ``value``.
    """

    code_value = ErrorCode.CONFIG_ERROR


class ImporterAuthFileMissingError(_CodedError):
    """No API key was found in the environment or the key file.

    Context keys: ``path``, ``env_var``.
    """

    code_value = ErrorCode.AUTH_FILE_MISSING


# ---------------------------------------------------------------------------
# API / transport errors
# ---------------------------------------------------------------------------

class ImporterValidationError(_CodedError):
    """Notion API returned 400 (or another non-retryable 4xx).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    code_value = ErrorCode.VALIDATION_ERROR


class ImporterAuthError(_CodedError):
    """Notion API returned 401 -- the integration token is invalid."""

    code_value = ErrorCode.AUTH_ERROR


class ImporterPermissionError(_CodedError):
    """Notion API returned 403 -- the integration lacks access.

    Context keys: ``operation``.
    """

    code_value = ErrorCode.PERMISSION_ERROR


class ImporterNotFoundError(_CodedError):
    """Notion API returned 404 -- the page, database or block does not exist.

    Context keys: ``path``.
    """

    code_value = ErrorCode.NOT_FOUND


class ImporterConflictError(_CodedError):
    """Notion API returned 409 -- a concurrent edit conflicted with ours."""

    code_value = ErrorCode.CONFLICT


class ImporterServerError(_CodedError):
    """Notion API returned a 5xx response.  Not retried."""

    code_value = ErrorCode.SERVER_ERROR


class ImporterRetryExhaustedError(_CodedError):
    """Every retry of a rate-limited request was rejected.

    Context keys: ``attempts``, ``last_status_code``.
    """

    code_value = ErrorCode.RETRY_EXHAUSTED


class ImporterNetworkError(_CodedError):
    """The request never produced an HTTP response (DNS, TLS, timeout).

    Context keys: ``url``, ``attempt``.
    """

    code_value = ErrorCode.NETWORK_ERROR


# ---------------------------------------------------------------------------
# Upload errors
# ---------------------------------------------------------------------------

class ImporterVerificationError(_CodedError):
    """Post-upload verification found fewer blocks than were uploaded.

    Context keys: ``page_id``, ``expected``, ``actual``, ``url``.
    """

    code_value = ErrorCode.VERIFICATION_FAILED
