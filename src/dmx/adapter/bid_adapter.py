"""
Video bid adapter.

Single entry point the auction host drives through an auction round:
validate bid requests, build vendor requests, interpret responses and
collect user syncs.
"""

from typing import Any, Optional

from ..config.adapter_config import AdapterConfig, get_adapter_config
from ..models.server_request import ServerRequest
from ..utils.constants import SUPPORTED_MEDIA_TYPES
from .request_builder import RequestBuilder
from .response import interpret_response
from .user_sync import get_user_syncs
from .validation import is_bid_request_valid


class DmxBidAdapter:
    """
    Bid adapter bound to one adapter configuration.

    Usage:
        adapter = DmxBidAdapter()
        valid = [b for b in bids if adapter.is_bid_request_valid(b)]
        requests = adapter.build_requests(valid, bidder_request, user_sync)
    """

    def __init__(self, config: Optional[AdapterConfig] = None):
        """
        Initialize the adapter.

        Args:
            config: Adapter configuration (loaded from YAML if None)
        """
        self.config = config or get_adapter_config()
        self.request_builder = RequestBuilder(config=self.config)

    @property
    def code(self) -> str:
        return self.config.bidder_code

    @property
    def gvl_id(self) -> int:
        return self.config.gvl_id

    @property
    def supported_media_types(self) -> list[str]:
        return list(SUPPORTED_MEDIA_TYPES)

    def is_bid_request_valid(self, bid: Any) -> bool:
        """Check whether a bid request can be served by this adapter."""
        return is_bid_request_valid(bid, self.code)

    def build_requests(
        self,
        bid_requests: Optional[list[dict[str, Any]]],
        bidder_request: Optional[dict[str, Any]] = None,
        sync_config: Any = None,
    ) -> list[ServerRequest]:
        """Build one vendor request per validated bid request."""
        return self.request_builder.build_requests(
            bid_requests, bidder_request, sync_config
        )

    def interpret_response(self, server_response: Any) -> list[dict[str, Any]]:
        """Turn a vendor response into bids."""
        return interpret_response(server_response)

    def get_user_syncs(
        self,
        sync_options: Optional[dict[str, Any]],
        server_responses: Optional[list[dict[str, Any]]],
    ) -> list[dict[str, str]]:
        """Collect the user syncs allowed by the host."""
        return get_user_syncs(sync_options, server_responses)
