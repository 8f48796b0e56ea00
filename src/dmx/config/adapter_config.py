"""
Adapter Configuration Management

Loads the adapter's identity and endpoint settings from YAML, and
normalises the user sync settings the auction host hands over.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse

import yaml

from ..logging import config_logger
from ..utils.constants import (
    BIDDER_CODE,
    DEFAULT_ENDPOINT_URL,
    DEFAULT_GVL_ID,
    LIBRARY_VERSION,
    SYNC_IFRAME,
    SYNC_IMAGE,
)

CONFIG_PATH_ENV = "DMX_ADAPTER_CONFIG"
ENDPOINT_URL_ENV = "DMX_ENDPOINT_URL"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "adapter.yaml"


class AdapterConfigError(ValueError):
    """Raised when the adapter configuration is invalid or unreadable."""


@dataclass(frozen=True)
class AdapterConfig:
    """Identity and endpoint of the adapter."""

    bidder_code: str = BIDDER_CODE
    gvl_id: int = DEFAULT_GVL_ID
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    library_version: str = LIBRARY_VERSION

    def __post_init__(self):
        """Validate the vendor ID and endpoint URL."""
        if not self.bidder_code:
            raise AdapterConfigError("bidder_code must not be empty")
        if isinstance(self.gvl_id, bool) or not isinstance(self.gvl_id, int) or self.gvl_id <= 0:
            raise AdapterConfigError(
                f"gvl_id must be a positive integer, got {self.gvl_id!r}"
            )
        parsed = urlparse(self.endpoint_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise AdapterConfigError(
                f"endpoint_url must be an http(s) URL, got {self.endpoint_url!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdapterConfig":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            bidder_code=data.get("bidder_code", defaults.bidder_code),
            gvl_id=data.get("gvl_id", defaults.gvl_id),
            endpoint_url=data.get("endpoint_url", defaults.endpoint_url),
            library_version=str(data.get("library_version", defaults.library_version)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bidder_code": self.bidder_code,
            "gvl_id": self.gvl_id,
            "endpoint_url": self.endpoint_url,
            "library_version": self.library_version,
        }


@dataclass(frozen=True)
class SyncFilter:
    """A `userSync.filterSettings` entry."""

    bidders: Union[str, tuple[str, ...]] = "*"
    filter: str = "include"

    @classmethod
    def from_dict(cls, data: Any) -> Optional["SyncFilter"]:
        if not isinstance(data, dict):
            return None
        bidders = data.get("bidders", "*")
        if isinstance(bidders, list):
            bidders = tuple(b for b in bidders if isinstance(b, str))
        elif bidders != "*":
            return None
        filter_type = data.get("filter", "include")
        return cls(
            bidders=bidders,
            filter=filter_type if filter_type in ("include", "exclude") else "include",
        )

    def allows(self, bidder_code: str) -> bool:
        """Check if this filter lets the bidder sync."""
        matches = self.bidders == "*" or bidder_code in self.bidders
        return matches if self.filter == "include" else not matches


@dataclass(frozen=True)
class UserSyncConfig:
    """
    User sync settings of the auction host.

    Mirrors the host's `userSync` configuration block.
    """

    sync_enabled: bool = False
    filter_settings: dict[str, SyncFilter] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "UserSyncConfig":
        """Create from the host's `userSync` object."""
        if not isinstance(data, dict):
            return cls()

        filter_settings = {}
        raw_filters = data.get("filterSettings")
        if isinstance(raw_filters, dict):
            for sync_type in ("all", SYNC_IFRAME, SYNC_IMAGE):
                parsed = SyncFilter.from_dict(raw_filters.get(sync_type))
                if parsed is not None:
                    filter_settings[sync_type] = parsed

        return cls(
            sync_enabled=bool(data.get("syncEnabled")),
            filter_settings=filter_settings,
        )

    def is_enabled_for(self, bidder_code: str) -> bool:
        """
        Check if the bidder may run user syncs.

        With no filter settings every bidder may sync; otherwise at least
        one of the `all`, `iframe` or `image` filters must allow it.
        """
        if not self.sync_enabled:
            return False
        if not self.filter_settings:
            return True
        return any(f.allows(bidder_code) for f in self.filter_settings.values())


def load_adapter_config(path: Union[str, Path, None] = None) -> AdapterConfig:
    """
    Load the adapter configuration from a YAML file.

    Args:
        path: Config file path. Defaults to $DMX_ADAPTER_CONFIG, then
              config/adapter.yaml

    Returns:
        AdapterConfig; built-in defaults when the file does not exist.
        $DMX_ENDPOINT_URL overrides the configured endpoint.

    Raises:
        AdapterConfigError: If the file cannot be parsed or is invalid
    """
    logger = config_logger()
    config_path = Path(path or os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise AdapterConfigError(f"YAML error in {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise AdapterConfigError(f"{config_path} must contain a mapping")
        data = loaded.get("adapter", loaded) or {}
        if not isinstance(data, dict):
            raise AdapterConfigError(f"'adapter' in {config_path} must be a mapping")
    else:
        logger.warning("Adapter config not found, using defaults", path=str(config_path))

    endpoint_override = os.environ.get(ENDPOINT_URL_ENV)
    if endpoint_override:
        data = {**data, "endpoint_url": endpoint_override}

    return AdapterConfig.from_dict(data)


# Global instance for easy access
_config: AdapterConfig | None = None


def get_adapter_config() -> AdapterConfig:
    """Get the global adapter configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_adapter_config()
    return _config


def reset_adapter_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config
    _config = None
