"""Client-specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .models import ExceptionMetadata

E = TypeVar("E")


class JsonClientError(Exception):
    """Base exception for all JsonClient failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        metadata: ExceptionMetadata[Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.metadata = metadata
        self.cause = cause

    def __str__(self) -> str:
        if self.status_code is None:
            return str(self.args[0])
        parts = [f"{self.status_code}"]
        if self.code:
            parts.append(self.code)
        return " ".join(parts) + f": {self.args[0]}"


class JsonClientUsageError(JsonClientError, ValueError):
    """Raised before any I/O when a request cannot be built from its arguments."""


class JsonClientHTTPError(JsonClientError, Generic[E]):
    """Raised for HTTP non-success responses.

    ``code`` holds the reason phrase and ``metadata.data`` the error body decoded
    into the declared error type, or ``None`` when it could not be decoded.
    """

    metadata: ExceptionMetadata[E]

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None,
        metadata: ExceptionMetadata[E],
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            code=code,
            metadata=metadata,
            cause=cause,
        )

    @property
    def data(self) -> E | None:
        return self.metadata.data
