"""Bunny CDN storage zone client.

Provides sync and asyncio clients for uploading, deleting, listing and
inspecting objects in a Bunny CDN storage zone. Every operation returns a
result value; only construction with incomplete configuration raises.
"""

from bunny_storage.async_client import AsyncStorageClient
from bunny_storage.client import StorageClient
from bunny_storage.config import StorageConfig
from bunny_storage.errors import ConfigurationError, FailureKind, StorageError
from bunny_storage.models import (
    DeleteResult,
    FileExistsResult,
    FileInfo,
    GetFileInfoResult,
    ListFilesResult,
    UploadFromUrlResult,
    UploadResult,
)
from bunny_storage.urls import build_https_url, ensure_https

__all__ = [
    "AsyncStorageClient",
    "StorageClient",
    "StorageConfig",
    "ConfigurationError",
    "FailureKind",
    "StorageError",
    "FileInfo",
    "UploadResult",
    "UploadFromUrlResult",
    "DeleteResult",
    "ListFilesResult",
    "GetFileInfoResult",
    "FileExistsResult",
    "ensure_https",
    "build_https_url",
]
