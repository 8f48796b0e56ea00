"""
Adapter Configuration Module

Key components:
    - AdapterConfig: Adapter identity (bidder code, GVL ID) and endpoint
    - UserSyncConfig: Host user sync settings
    - load_adapter_config(): Load configuration from YAML
"""

from .adapter_config import (
    AdapterConfig,
    AdapterConfigError,
    SyncFilter,
    UserSyncConfig,
    get_adapter_config,
    load_adapter_config,
    reset_adapter_config,
)

__all__ = [
    "AdapterConfig",
    "AdapterConfigError",
    "SyncFilter",
    "UserSyncConfig",
    "get_adapter_config",
    "load_adapter_config",
    "reset_adapter_config",
]
