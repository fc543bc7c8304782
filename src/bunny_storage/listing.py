"""Normalization of remote listing records and HEAD headers into FileInfo.

The storage API is not consistent about field names: listing entries may use
the long form (ObjectName, Length, LastChanged, IsDirectory) or the short form
(Name, Size). Missing or unparsable sizes default to 0 and missing or
unparsable timestamps default to the time of the request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from bunny_storage.models import FileInfo

logger = logging.getLogger(__name__)

_NAME_KEYS = ("ObjectName", "Name")
_SIZE_KEYS = ("Length", "Size")
_TIMESTAMP_KEYS = ("LastChanged", "LastModified")
_DIRECTORY_KEYS = ("IsDirectory",)


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _parse_size(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        size = int(raw)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring unparsable object size: %r", raw)
        return 0
    return max(size, 0)


def _as_utc(value: datetime) -> datetime:
    # The storage API reports naive UTC timestamps
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_iso_timestamp(raw: Any, now: datetime) -> datetime:
    if not isinstance(raw, str) or not raw:
        return now
    try:
        return _as_utc(datetime.fromisoformat(raw))
    except ValueError:
        logger.debug("Ignoring unparsable timestamp: %r", raw)
        return now


def _parse_http_date(raw: str | None, now: datetime) -> datetime:
    if not raw:
        return now
    try:
        return _as_utc(parsedate_to_datetime(raw))
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring unparsable last-modified header: %r", raw)
        return now


def join_object_path(parent_path: str, name: str) -> str:
    """Join a directory path and an entry name without doubling slashes."""
    parent = parent_path.strip("/")
    if not parent:
        return name
    return f"{parent}/{name}"


def file_info_from_record(
    record: Mapping[str, Any],
    parent_path: str = "",
    *,
    now: datetime | None = None,
) -> FileInfo:
    """Build a FileInfo from one entry of a directory listing.

    Args:
        record: Decoded JSON object for a single listing entry.
        parent_path: Path that was listed; the entry path is parent_path/name.
        now: Fallback timestamp for entries without a usable change time.

    Returns:
        Canonical FileInfo for the entry.
    """
    fallback = now or datetime.now(UTC)
    name_raw = _first_present(record, _NAME_KEYS)
    name = str(name_raw) if name_raw is not None else ""

    return FileInfo(
        name=name,
        path=join_object_path(parent_path, name),
        size=_parse_size(_first_present(record, _SIZE_KEYS)),
        last_modified=_parse_iso_timestamp(_first_present(record, _TIMESTAMP_KEYS), fallback),
        is_directory=_first_present(record, _DIRECTORY_KEYS) is True,
    )


def file_info_from_headers(
    headers: Mapping[str, str],
    path: str,
    *,
    now: datetime | None = None,
) -> FileInfo:
    """Build a FileInfo from the headers of a HEAD response.

    A HEAD request cannot tell a directory apart from a file, so
    ``is_directory`` is always False.

    Args:
        headers: Response headers (case-insensitive mapping such as httpx.Headers).
        path: Object path that was requested.
        now: Fallback timestamp when last-modified is absent.
    """
    fallback = now or datetime.now(UTC)
    return FileInfo(
        name=path.rstrip("/").rsplit("/", 1)[-1],
        path=path,
        size=_parse_size(headers.get("content-length")),
        last_modified=_parse_http_date(headers.get("last-modified"), fallback),
        is_directory=False,
    )
