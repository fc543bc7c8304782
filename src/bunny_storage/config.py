"""Storage client configuration.

Values are supplied by the embedding application; nothing is read from the
environment. Field names may be given in snake_case or in the camelCase form
used by JavaScript-style settings files (storageZone, apiKey, cdnUrl,
pullZoneUrl).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bunny_storage.errors import ConfigurationError

REQUIRED_FIELDS = ("storage_zone", "api_key", "cdn_url", "pull_zone_url")


class StorageConfig(BaseModel):
    """Connection settings for one storage zone.

    Attributes:
        storage_zone: Name of the storage zone (bucket).
        api_key: Storage zone password, sent as the AccessKey header.
        cdn_url: Storage API endpoint (e.g., "storage.bunnycdn.com").
        pull_zone_url: Public pull zone URL used to build returned object URLs.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    storage_zone: str | None = None
    api_key: str | None = None
    cdn_url: str | None = None
    pull_zone_url: str | None = None

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are absent or empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def __repr__(self) -> str:
        # api_key is a credential
        return (
            f"StorageConfig(storage_zone={self.storage_zone!r}, api_key='***', "
            f"cdn_url={self.cdn_url!r}, pull_zone_url={self.pull_zone_url!r})"
        )

    __str__ = __repr__


def require_complete(config: StorageConfig | None) -> StorageConfig:
    """Validate that every required field is present.

    Args:
        config: Configuration supplied to a client constructor.

    Returns:
        The same configuration object.

    Raises:
        ConfigurationError: If config is None or any field is empty.
    """
    if config is None:
        raise ConfigurationError(list(REQUIRED_FIELDS))
    missing = config.missing_fields()
    if missing:
        raise ConfigurationError(missing)
    return config
