"""Tests for StorageConfig and client construction validation."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from bunny_storage import AsyncStorageClient, ConfigurationError, StorageClient, StorageConfig

FIELDS = ("storage_zone", "api_key", "cdn_url", "pull_zone_url")


def _complete() -> dict[str, str]:
    return {
        "storage_zone": "zone",
        "api_key": "key",
        "cdn_url": "storage.bunnycdn.com",
        "pull_zone_url": "zone.b-cdn.net",
    }


def _no_network_client() -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request: {request.method} {request.url}")

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestStorageConfig:
    def test_camel_case_aliases_accepted(self) -> None:
        config = StorageConfig.model_validate(
            {
                "storageZone": "zone",
                "apiKey": "key",
                "cdnUrl": "storage.bunnycdn.com",
                "pullZoneUrl": "zone.b-cdn.net",
            }
        )
        assert config.storage_zone == "zone"
        assert config.missing_fields() == []

    def test_frozen(self) -> None:
        config = StorageConfig(**_complete())
        with pytest.raises(ValidationError):
            config.storage_zone = "other"  # type: ignore[misc]

    def test_repr_masks_api_key(self) -> None:
        config = StorageConfig(**_complete())
        assert "'key'" not in repr(config)
        assert "***" in repr(config)

    def test_missing_fields_reported(self) -> None:
        config = StorageConfig(storage_zone="zone", api_key="")
        assert config.missing_fields() == ["api_key", "cdn_url", "pull_zone_url"]


class TestClientConstruction:
    @pytest.mark.parametrize("field", FIELDS)
    def test_empty_field_fails(self, field: str) -> None:
        values = _complete()
        values[field] = ""
        with pytest.raises(ConfigurationError) as exc_info:
            StorageClient(StorageConfig(**values), http_client=_no_network_client())
        assert exc_info.value.missing_fields == [field]

    @pytest.mark.parametrize("field", FIELDS)
    def test_absent_field_fails(self, field: str) -> None:
        values = _complete()
        del values[field]
        with pytest.raises(ConfigurationError):
            StorageClient(StorageConfig(**values), http_client=_no_network_client())

    @pytest.mark.parametrize("field", FIELDS)
    def test_async_client_empty_field_fails(self, field: str) -> None:
        values = _complete()
        values[field] = ""
        with pytest.raises(ConfigurationError):
            AsyncStorageClient(StorageConfig(**values))

    def test_none_config_fails(self) -> None:
        with pytest.raises(ConfigurationError):
            StorageClient(None)  # type: ignore[arg-type]

    def test_error_message_names_fields(self) -> None:
        with pytest.raises(ConfigurationError, match="pull_zone_url"):
            StorageClient(StorageConfig(storage_zone="z", api_key="k", cdn_url="c"))

    def test_complete_config_constructs(self) -> None:
        client = StorageClient(StorageConfig(**_complete()), http_client=_no_network_client())
        assert client.config.storage_zone == "zone"
