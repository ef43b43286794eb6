"""Error taxonomy for Shippo API calls.

A single exception type carries an explicit ``kind`` tag plus payload fields,
so callers branch on ``exc.kind`` instead of on a class hierarchy:

- ``AUTHENTICATION``: missing key locally, or remote 401/403. Not retryable.
- ``RATE_LIMIT``: remote 429, carries ``retry_after_seconds``.
- ``API``: any other non-2xx, carries ``status_code``.
- ``VALIDATION``: tool input that does not match its schema.
"""

from enum import Enum
from typing import Any

from pydantic import ValidationError

from .constants import DEFAULT_RETRY_AFTER_SECONDS


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    API = "api"
    VALIDATION = "validation"


class ShippoError(Exception):
    """Failure raised by the Shippo client or the tool layer."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        retry_after_seconds: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.retry_after_seconds = retry_after_seconds

    @classmethod
    def authentication(cls, message: str) -> "ShippoError":
        return cls(ErrorKind.AUTHENTICATION, message)

    @classmethod
    def rate_limit(
        cls, message: str, retry_after_seconds: int = DEFAULT_RETRY_AFTER_SECONDS
    ) -> "ShippoError":
        return cls(
            ErrorKind.RATE_LIMIT, message,
            status_code=429, retry_after_seconds=retry_after_seconds,
        )

    @classmethod
    def api(cls, message: str, status_code: int) -> "ShippoError":
        return cls(ErrorKind.API, message, status_code=status_code)

    @classmethod
    def validation(cls, message: str) -> "ShippoError":
        return cls(ErrorKind.VALIDATION, message)

    @property
    def retryable(self) -> bool:
        if self.kind is ErrorKind.RATE_LIMIT:
            return True
        return (
            self.kind is ErrorKind.API
            and self.status_code is not None
            and self.status_code >= 500
        )

    def __repr__(self) -> str:
        return (
            f"ShippoError(kind={self.kind.value!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


def from_validation_error(exc: ValidationError) -> ShippoError:
    """Collapse a pydantic ValidationError into a VALIDATION ShippoError."""
    problems = [
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in exc.errors()
    ]
    return ShippoError.validation("Invalid input: " + "; ".join(problems))


def error_details(error: BaseException) -> dict[str, Any]:
    """Render any exception as a plain dict for logs and error envelopes."""
    if isinstance(error, ValidationError):
        error = from_validation_error(error)

    if isinstance(error, ShippoError):
        details: dict[str, Any] = {
            "type": error.kind.value,
            "message": error.message,
            "retryable": error.retryable,
        }
        if error.status_code is not None:
            details["status_code"] = error.status_code
        if error.retry_after_seconds is not None:
            details["retry_after_seconds"] = error.retry_after_seconds
        return details

    return {"type": type(error).__name__, "message": str(error)}
