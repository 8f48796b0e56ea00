"""
User sync handling.

Sync pixels and iframes are declared by the endpoint in each response body
under `userSyncs`; the host decides which sync types it allows.
"""

from typing import Any, Optional

from ..config.adapter_config import UserSyncConfig
from ..utils.constants import BIDDER_CODE, SYNC_IFRAME, SYNC_IMAGE


def get_user_syncs(
    sync_options: Optional[dict[str, Any]],
    server_responses: Optional[list[dict[str, Any]]],
) -> list[dict[str, str]]:
    """
    Collect the user syncs to run after the auction.

    Iframe syncs are preferred when the host allows both types.

    Args:
        sync_options: `{"iframeEnabled": bool, "pixelEnabled": bool}`
        server_responses: Transport responses of the auction round

    Returns:
        List of `{"type", "url"}` sync entries
    """
    sync_options = sync_options or {}

    if sync_options.get("iframeEnabled"):
        sync_type = SYNC_IFRAME
    elif sync_options.get("pixelEnabled"):
        sync_type = SYNC_IMAGE
    else:
        return []

    syncs = []
    for response in server_responses or []:
        body = response.get("body") if isinstance(response, dict) else None
        entries = body.get("userSyncs") if isinstance(body, dict) else None
        if not isinstance(entries, list):
            continue

        for entry in entries:
            if (
                isinstance(entry, dict)
                and entry.get("type") == sync_type
                and isinstance(entry.get("url"), str)
            ):
                syncs.append({"type": sync_type, "url": entry["url"]})

    return syncs


def is_user_sync_enabled(sync_config: Any, bidder_code: str = BIDDER_CODE) -> bool:
    """
    Check if the host lets this bidder run user syncs.

    Args:
        sync_config: Host `userSync` object or a UserSyncConfig
        bidder_code: Bidder code matched against the filter settings

    Returns:
        True if at least one sync type is allowed for the bidder
    """
    if not isinstance(sync_config, UserSyncConfig):
        sync_config = UserSyncConfig.from_dict(sync_config)
    return sync_config.is_enabled_for(bidder_code)
