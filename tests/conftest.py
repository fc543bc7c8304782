"""Pytest configuration and fixtures for bunny_storage tests.

All HTTP traffic goes through httpx.MockTransport; no test touches the network.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from bunny_storage.config import StorageConfig


class RecordingHandler:
    """MockTransport handler that records requests and replies from a route table.

    Routes are keyed by (method, url). Unmatched requests get ``default``.
    """

    def __init__(self, default: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {}
        self.default = default if default is not None else httpx.Response(200)

    def route(self, method: str, url: str, response: Any) -> None:
        """Register a response, or an exception to raise, for method and url."""
        self.routes[(method, url)] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.routes.get((request.method, str(request.url)), self.default)
        if isinstance(outcome, Exception):
            raise outcome
        # fresh response per request; the client binds streams to each one
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )


@pytest.fixture
def config() -> StorageConfig:
    """Return a complete storage configuration."""
    return StorageConfig(
        storage_zone="my-zone",
        api_key="secret-access-key",
        cdn_url="storage.bunnycdn.com",
        pull_zone_url="http://my-zone.b-cdn.net/",
    )


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()
