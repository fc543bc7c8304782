"""Result and metadata types returned by the storage clients.

Every public client method returns one of these values; failures are
reported through ``success``/``error`` rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bunny_storage.errors import FailureKind, StorageError

_RETRYABLE_STATUS_CODES = frozenset({408, 429})


@dataclass(frozen=True)
class FileInfo:
    """Snapshot of one stored object or directory.

    Attributes:
        name: Last segment of the object path.
        path: Object path relative to the storage zone.
        size: Size in bytes (0 when the service did not report it).
        last_modified: Last change timestamp (request time when not reported).
        is_directory: Whether the entry is a directory.
    """

    name: str
    path: str
    size: int
    last_modified: datetime
    is_directory: bool = False


@dataclass(frozen=True)
class _OperationResult:
    success: bool
    error: str | None = None
    error_kind: FailureKind | None = None
    status_code: int | None = None

    @property
    def is_retryable(self) -> bool:
        """Whether repeating the same call could plausibly succeed."""
        return _is_retryable(self.error_kind, self.status_code)


@dataclass(frozen=True)
class UploadResult(_OperationResult):
    """Result of an upload. ``url`` is the public pull zone URL on success."""

    url: str | None = None


@dataclass(frozen=True)
class UploadFromUrlResult(_OperationResult):
    """Result of an upload pulled from an external source URL."""

    url: str | None = None


@dataclass(frozen=True)
class DeleteResult(_OperationResult):
    """Result of a delete."""


@dataclass(frozen=True)
class ListFilesResult(_OperationResult):
    """Result of a directory listing. ``files`` is None on failure."""

    files: list[FileInfo] | None = None


@dataclass(frozen=True)
class GetFileInfoResult(_OperationResult):
    """Result of a metadata lookup. ``file_info`` is None when the object is absent."""

    file_info: FileInfo | None = None


@dataclass(frozen=True)
class FileExistsResult:
    """Result of an existence check.

    Attributes:
        exists: True only for an existing, non-directory object.
        error: Error message when the underlying lookup failed.
    """

    exists: bool
    error: str | None = None
    error_kind: FailureKind | None = None
    status_code: int | None = None

    @property
    def is_retryable(self) -> bool:
        return _is_retryable(self.error_kind, self.status_code)


def _is_retryable(kind: FailureKind | None, status_code: int | None) -> bool:
    if kind == FailureKind.TRANSPORT:
        return True
    if kind == FailureKind.REMOTE_STATUS and status_code is not None:
        return status_code in _RETRYABLE_STATUS_CODES or status_code >= 500
    return False


def failure_fields(exc: StorageError) -> dict[str, Any]:
    """Return the common failure keyword arguments for a result type."""
    return {
        "error": exc.message,
        "error_kind": exc.kind,
        "status_code": getattr(exc, "status_code", None),
    }
