"""OpenTelemetry spans for storage operations.

Security:
    - Never export the access key, request headers or bodies
    - Object paths are exported only as SHA256 digests
    - Source URLs for pull uploads are reduced to their host
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlsplit

from opentelemetry import trace
from opentelemetry.trace import Span, StatusCode, Tracer, TracerProvider

TRACER_NAME = "bunny_storage"


def get_tracer(tracer_provider: TracerProvider | None = None) -> Tracer:
    """Return a tracer from the given provider, or the global one."""
    return trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)


def _key_digest(path: str) -> str:
    return hashlib.sha256(path.encode("utf-8")).hexdigest()


def source_host(url: str) -> str:
    """Host (and port) of a URL with userinfo removed, or "unknown"."""
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        port = f":{parts.port}" if parts.port else ""
    except ValueError:
        return "unknown"
    return f"{host}{port}" if host else "unknown"


@contextmanager
def storage_span(
    tracer: Tracer,
    operation: str,
    *,
    storage_zone: str | None,
    path: str,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Run a storage operation inside a span with safe attributes.

    Args:
        tracer: Tracer to create the span with.
        operation: Operation name (e.g., "upload", "list").
        storage_zone: Storage zone the operation targets.
        path: Object path; exported as a digest only.
        attributes: Additional safe attributes.
    """
    with tracer.start_as_current_span(f"{TRACER_NAME}.{operation}") as span:
        span.set_attribute("storage.zone", storage_zone or "")
        span.set_attribute("bunny_storage.object_key_sha256", _key_digest(path))
        for name, value in (attributes or {}).items():
            span.set_attribute(name, value)
        yield span


def record_result(span: Span, result: Any) -> None:
    """Copy status information from a result value onto a span."""
    status_code = getattr(result, "status_code", None)
    if status_code is not None:
        span.set_attribute("http.status_code", status_code)

    error_kind = getattr(result, "error_kind", None)
    if error_kind is None:
        return
    span.set_attribute("bunny_storage.failure_kind", str(error_kind))
    span.set_status(StatusCode.ERROR, str(error_kind))
