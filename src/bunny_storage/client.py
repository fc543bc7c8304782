"""Synchronous Bunny CDN storage client.

Each public method performs one HTTP round trip (two for upload_from_url)
and returns a result value. Expected failures (non-2xx statuses, transport
errors, malformed input) never raise; they come back as results with
``success=False``.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx
from opentelemetry.trace import TracerProvider

from bunny_storage.config import StorageConfig, require_complete
from bunny_storage.errors import MalformedInputError, StorageError
from bunny_storage.models import (
    DeleteResult,
    FileExistsResult,
    GetFileInfoResult,
    ListFilesResult,
    UploadFromUrlResult,
    UploadResult,
)
from bunny_storage.responses import (
    DEFAULT_UPLOAD_CONTENT_TYPE,
    DELETE_FAILED,
    SOURCE_FETCH_FAILED,
    UPLOAD_FAILED,
    StorageRequest,
    delete_request,
    derive_delete_path,
    ensure_success,
    exists_from_info,
    failed,
    files_from_listing,
    head_request,
    info_from_head,
    list_request,
    public_url,
    pulled_upload_result,
    source_content_type,
    source_request,
    transport_failure,
    upload_request,
)
from bunny_storage.tracing import get_tracer, record_result, source_host, storage_span

logger = logging.getLogger(__name__)


class StorageClient:
    """Client for one Bunny CDN storage zone.

    Example:
        with StorageClient(StorageConfig(...)) as storage:
            result = storage.upload(data, "buildings/123/image.jpg")
    """

    def __init__(
        self,
        config: StorageConfig,
        *,
        http_client: httpx.Client | None = None,
        tracer_provider: TracerProvider | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Storage zone settings; every field is required.
            http_client: Optional httpx.Client for dependency injection. An
                injected client is not closed by this object.
            tracer_provider: Optional OpenTelemetry provider (global one if None).

        Raises:
            ConfigurationError: If config is None or has an empty field.
        """
        self._config = require_complete(config)
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.Client()
        self._tracer = get_tracer(tracer_provider)

    @property
    def config(self) -> StorageConfig:
        return self._config

    def close(self) -> None:
        """Close the internally created HTTP client, if any."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> StorageClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _send(self, request: StorageRequest, *, path: str, fallback: str) -> httpx.Response:
        try:
            return self._http_client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
                follow_redirects=request.follow_redirects,
            )
        except Exception as exc:
            raise transport_failure(exc, fallback, path) from exc

    def upload(
        self,
        buffer: bytes,
        path: str,
        content_type: str = DEFAULT_UPLOAD_CONTENT_TYPE,
    ) -> UploadResult:
        """Upload a buffer to the storage zone.

        Args:
            buffer: File content.
            path: Full object path including file name (e.g., "buildings/123/image.jpg").
            content_type: MIME type sent with the upload.

        Returns:
            UploadResult whose ``url`` is the public pull zone URL on success.
        """
        with storage_span(
            self._tracer, "upload", storage_zone=self._config.storage_zone, path=path
        ) as span:
            try:
                response = self._send(
                    upload_request(self._config, buffer, path, content_type),
                    path=path,
                    fallback="Unknown upload error",
                )
                ensure_success(response, UPLOAD_FAILED, path)
            except StorageError as exc:
                logger.error("Bunny CDN upload failed for %s: %s", path, exc)
                result: UploadResult = failed(UploadResult, exc)
            else:
                logger.debug("Uploaded %d bytes to %s", len(buffer), path)
                result = UploadResult(
                    success=True,
                    url=public_url(self._config, path),
                    status_code=response.status_code,
                )
            record_result(span, result)
            return result

    def delete(self, path: str) -> DeleteResult:
        """Delete an object. A 404 from the service is reported as a failure."""
        with storage_span(
            self._tracer, "delete", storage_zone=self._config.storage_zone, path=path
        ) as span:
            try:
                response = self._send(
                    delete_request(self._config, path),
                    path=path,
                    fallback="Unknown delete error",
                )
                ensure_success(response, DELETE_FAILED, path)
            except StorageError as exc:
                logger.warning("Failed to delete %s from Bunny CDN: %s", path, exc)
                result: DeleteResult = failed(DeleteResult, exc)
            else:
                logger.debug("Deleted %s", path)
                result = DeleteResult(success=True, status_code=response.status_code)
            record_result(span, result)
            return result

    def delete_by_url(self, public_url: str, base_path: str) -> DeleteResult:
        """Delete an object given its public URL.

        The object path is base_path joined with the last segment of the URL.

        Args:
            public_url: Public CDN URL of the file.
            base_path: Directory the file lives in (e.g., "buildings/123").
        """
        try:
            path = derive_delete_path(public_url, base_path)
        except MalformedInputError as exc:
            logger.warning("Cannot delete by URL %s: %s", public_url, exc)
            return failed(DeleteResult, exc)
        return self.delete(path)

    def list(self, path: str = "") -> ListFilesResult:
        """List the entries of a directory.

        A directory that does not exist lists as empty rather than failing.
        """
        with storage_span(
            self._tracer, "list", storage_zone=self._config.storage_zone, path=path
        ) as span:
            try:
                response = self._send(
                    list_request(self._config, path),
                    path=path,
                    fallback="Unknown list error",
                )
                files = files_from_listing(response, path)
            except StorageError as exc:
                logger.warning("Failed to list %s on Bunny CDN: %s", path, exc)
                result: ListFilesResult = failed(ListFilesResult, exc)
            else:
                span.set_attribute("bunny_storage.entry_count", len(files))
                result = ListFilesResult(
                    success=True, files=files, status_code=response.status_code
                )
            record_result(span, result)
            return result

    def get_info(self, path: str) -> GetFileInfoResult:
        """Fetch object metadata with a HEAD request.

        Returns:
            GetFileInfoResult with ``file_info=None`` when the object does not exist.
        """
        with storage_span(
            self._tracer, "get_info", storage_zone=self._config.storage_zone, path=path
        ) as span:
            try:
                response = self._send(
                    head_request(self._config, path),
                    path=path,
                    fallback="Unknown file info error",
                )
                info = info_from_head(response, path)
            except StorageError as exc:
                logger.warning("Failed to get info for %s on Bunny CDN: %s", path, exc)
                result: GetFileInfoResult = failed(GetFileInfoResult, exc)
            else:
                result = GetFileInfoResult(
                    success=True, file_info=info, status_code=response.status_code
                )
            record_result(span, result)
            return result

    def exists(self, path: str) -> FileExistsResult:
        """Check whether a file (not a directory) exists at path."""
        return exists_from_info(self.get_info(path))

    def upload_from_url(self, source_url: str, dest_path: str) -> UploadFromUrlResult:
        """Download a file from an external URL and upload it to the storage zone.

        The source is fetched without credentials. Its content-type header is
        reused for the upload (application/octet-stream if absent).

        Args:
            source_url: URL to fetch the file from.
            dest_path: Object path to upload to.
        """
        with storage_span(
            self._tracer,
            "upload_from_url",
            storage_zone=self._config.storage_zone,
            path=dest_path,
            attributes={"bunny_storage.source_host": source_host(source_url)},
        ) as span:
            try:
                response = self._send(
                    source_request(source_url),
                    path=dest_path,
                    fallback="Unknown upload from URL error",
                )
                ensure_success(response, SOURCE_FETCH_FAILED, dest_path)
            except StorageError as exc:
                logger.warning("Failed to fetch %s for upload: %s", source_host(source_url), exc)
                result: UploadFromUrlResult = failed(UploadFromUrlResult, exc)
            else:
                upload = self.upload(response.content, dest_path, source_content_type(response))
                result = pulled_upload_result(upload)
            record_result(span, result)
            return result
