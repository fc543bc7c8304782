"""Bunny storage error types.

ConfigurationError is the only exception raised across the public surface
(at client construction). The remaining types are raised at the transport
boundary and mapped to failure results by the clients.
"""

from __future__ import annotations

from enum import StrEnum

import httpx


class FailureKind(StrEnum):
    """Classification of a failed operation result."""

    REMOTE_STATUS = "REMOTE_STATUS"
    TRANSPORT = "TRANSPORT"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class StorageError(Exception):
    """Base exception for storage operations.

    Attributes:
        message: Human-readable error message.
        path: Object path associated with the operation (if applicable).
    """

    kind: FailureKind | None = None

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class ConfigurationError(StorageError):
    """Raised when a client is constructed with missing configuration."""

    def __init__(self, missing_fields: list[str]) -> None:
        super().__init__(
            "Missing Bunny CDN configuration. All fields (storage_zone, api_key, "
            f"cdn_url, pull_zone_url) are required; missing: {', '.join(missing_fields)}"
        )
        self.missing_fields = missing_fields


class RemoteRequestError(StorageError):
    """Raised when the remote service answers with a non-2xx status."""

    kind = FailureKind.REMOTE_STATUS

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reason: str,
        path: str | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_response(
        cls, prefix: str, response: httpx.Response, *, path: str | None = None
    ) -> RemoteRequestError:
        """Build an error from a response, e.g. "Upload failed: 500 Internal Server Error"."""
        reason = response.reason_phrase
        return cls(
            f"{prefix}: {response.status_code} {reason}".rstrip(),
            status_code=response.status_code,
            reason=reason,
            path=path,
        )


class TransportError(StorageError):
    """Raised when the request never produced an HTTP response.

    Wraps httpx.RequestError (DNS failures, refused connections, timeouts).
    """

    kind = FailureKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.cause = cause

    @classmethod
    def from_exception(
        cls, exc: Exception, fallback: str, *, path: str | None = None
    ) -> TransportError:
        return cls(str(exc) or fallback, path=path, cause=exc)


class MalformedInputError(StorageError):
    """Raised when caller input cannot be turned into a request."""

    kind = FailureKind.MALFORMED_INPUT


class InvalidResponseError(StorageError):
    """Raised when a 2xx response body does not have the expected shape."""

    kind = FailureKind.INVALID_RESPONSE
