"""Request construction and response mapping shared by both clients.

Functions here never perform I/O. The sync and async clients build a
StorageRequest, send it with their own httpx client, and hand the response
back to these helpers, which either return a payload or raise a
StorageError subclass for the client to turn into a failure result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from bunny_storage.config import StorageConfig
from bunny_storage.errors import (
    InvalidResponseError,
    MalformedInputError,
    RemoteRequestError,
    StorageError,
    TransportError,
)
from bunny_storage.listing import file_info_from_headers, file_info_from_record
from bunny_storage.models import (
    FileExistsResult,
    FileInfo,
    GetFileInfoResult,
    UploadFromUrlResult,
    UploadResult,
    failure_fields,
)
from bunny_storage.urls import build_https_url, last_path_segment

logger = logging.getLogger(__name__)

ACCESS_KEY_HEADER = "AccessKey"
DEFAULT_UPLOAD_CONTENT_TYPE = "image/jpeg"
DEFAULT_SOURCE_CONTENT_TYPE = "application/octet-stream"

UPLOAD_FAILED = "Upload failed"
DELETE_FAILED = "Delete failed"
LIST_FAILED = "List failed"
GET_INFO_FAILED = "Get file info failed"
SOURCE_FETCH_FAILED = "Failed to fetch source URL"


@dataclass(frozen=True)
class StorageRequest:
    """One outbound HTTP request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None
    follow_redirects: bool = False


def object_url(config: StorageConfig, path: str) -> str:
    """Storage API URL of an object: {cdn_url}/{storage_zone}/{path}."""
    return build_https_url(str(config.cdn_url), f"{config.storage_zone}/{path}")


def public_url(config: StorageConfig, path: str) -> str:
    """Pull zone URL under which an uploaded object is served."""
    return build_https_url(str(config.pull_zone_url), path)


def _auth_headers(config: StorageConfig) -> dict[str, str]:
    return {ACCESS_KEY_HEADER: str(config.api_key)}


def upload_request(
    config: StorageConfig, buffer: bytes, path: str, content_type: str
) -> StorageRequest:
    headers = _auth_headers(config)
    headers["Content-Type"] = content_type
    return StorageRequest("PUT", object_url(config, path), headers, bytes(buffer))


def delete_request(config: StorageConfig, path: str) -> StorageRequest:
    return StorageRequest("DELETE", object_url(config, path), _auth_headers(config))


def list_request(config: StorageConfig, path: str) -> StorageRequest:
    headers = _auth_headers(config)
    headers["Accept"] = "application/json"
    return StorageRequest("GET", object_url(config, path), headers)


def head_request(config: StorageConfig, path: str) -> StorageRequest:
    return StorageRequest("HEAD", object_url(config, path), _auth_headers(config))


def source_request(source_url: str) -> StorageRequest:
    """GET for an external source; carries no credentials and follows redirects."""
    return StorageRequest("GET", source_url, follow_redirects=True)


def transport_failure(exc: Exception, fallback: str, path: str | None) -> TransportError:
    """Classify an exception raised while sending a request."""
    if not isinstance(exc, (httpx.HTTPError, httpx.InvalidURL)):
        logger.exception("Unexpected error during storage request for %s", path)
    return TransportError.from_exception(exc, fallback, path=path)


def ensure_success(response: httpx.Response, prefix: str, path: str | None = None) -> None:
    """Raise RemoteRequestError for a non-2xx response."""
    if not response.is_success:
        raise RemoteRequestError.from_response(prefix, response, path=path)


def derive_delete_path(url: str, base_path: str) -> str:
    """Object path for a public URL: base_path + "/" + last URL segment.

    Raises:
        MalformedInputError: If no file name can be extracted from the URL.
    """
    try:
        filename = last_path_segment(url)
    except ValueError as exc:
        raise MalformedInputError(
            f"Could not extract filename from URL: {exc}", path=url
        ) from exc
    if not filename:
        raise MalformedInputError("Could not extract filename from URL", path=url)
    if not base_path:
        return filename
    return f"{base_path}/{filename}"


def parse_listing(response: httpx.Response, path: str) -> list[FileInfo]:
    """Decode a listing response body into FileInfo entries.

    Raises:
        InvalidResponseError: If the body is not a JSON array of objects.
    """
    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise InvalidResponseError(
            f"List failed: invalid JSON response ({exc})", path=path
        ) from exc

    if not isinstance(payload, list):
        raise InvalidResponseError("List failed: expected a JSON array", path=path)

    entries: list[FileInfo] = []
    for record in payload:
        if not isinstance(record, dict):
            raise InvalidResponseError("List failed: expected JSON objects in array", path=path)
        entries.append(file_info_from_record(record, path))
    return entries


def files_from_listing(response: httpx.Response, path: str) -> list[FileInfo]:
    """Map a listing response to entries; a missing directory lists as empty."""
    if response.status_code == 404:
        return []
    ensure_success(response, LIST_FAILED, path)
    return parse_listing(response, path)


def info_from_head(response: httpx.Response, path: str) -> FileInfo | None:
    """Map a HEAD response to FileInfo; None when the object does not exist."""
    if response.status_code == 404:
        return None
    ensure_success(response, GET_INFO_FAILED, path)
    return file_info_from_headers(response.headers, path)


def source_content_type(response: httpx.Response) -> str:
    return response.headers.get("content-type") or DEFAULT_SOURCE_CONTENT_TYPE


def exists_from_info(result: GetFileInfoResult) -> FileExistsResult:
    if not result.success:
        return FileExistsResult(
            exists=False,
            error=result.error,
            error_kind=result.error_kind,
            status_code=result.status_code,
        )
    info = result.file_info
    return FileExistsResult(exists=info is not None and not info.is_directory)


def pulled_upload_result(upload: UploadResult) -> UploadFromUrlResult:
    return UploadFromUrlResult(
        success=upload.success,
        url=upload.url,
        error=upload.error,
        error_kind=upload.error_kind,
        status_code=upload.status_code,
    )


def failed(result_type: type[Any], exc: StorageError) -> Any:
    """Build a failure result of the given type from a StorageError."""
    return result_type(success=False, **failure_fields(exc))
