"""
Request Builder for the video bid adapter.

Turns the validated bid requests of an auction round into requests for the
vendor endpoint: each entry gets its video metadata resolved, its consent
evaluated and the OpenRTB request attached.
"""

from typing import Any, Optional, Union

from ..config.adapter_config import AdapterConfig, UserSyncConfig, get_adapter_config
from ..logging import AuctionLogContext, adapter_logger
from ..metadata.metadata_resolver import MetadataResolver
from ..metadata.sources import ContentSignals, VideoParams
from ..models.bid_request import BidderRequest, BidRequestEntry
from ..models.server_request import RequestOptions, ServerRequest
from ..privacy.consent_evaluator import ConsentEvaluator
from .ortb_converter import build_ortb_request
from .user_sync import is_user_sync_enabled


class RequestBuilder:
    """
    Builds one vendor request per bid request entry.

    Entries are expected to have passed `is_bid_request_valid`; they are
    processed independently and in order.
    """

    def __init__(
        self,
        config: Optional[AdapterConfig] = None,
        metadata_resolver: Optional[MetadataResolver] = None,
        consent_evaluator: Optional[ConsentEvaluator] = None,
    ):
        """
        Initialize the builder.

        Args:
            config: Adapter configuration (loaded from YAML if None)
            metadata_resolver: Resolver for video metadata
            consent_evaluator: Evaluator for credentialed requests
                (bound to the configured GVL ID if None)
        """
        self.config = config or get_adapter_config()
        self.metadata_resolver = metadata_resolver or MetadataResolver()
        self.consent_evaluator = consent_evaluator or ConsentEvaluator(
            vendor_id=self.config.gvl_id
        )
        self._logger = adapter_logger(self.config.bidder_code)

    def build_requests(
        self,
        bid_requests: Optional[list[dict[str, Any]]],
        bidder_request: Optional[dict[str, Any]] = None,
        sync_config: Union[UserSyncConfig, dict[str, Any], None] = None,
    ) -> list[ServerRequest]:
        """
        Build vendor requests for an auction round.

        Args:
            bid_requests: Validated bid requests for this adapter
            bidder_request: Auction context (referer, consent, ortb2, timeout)
            sync_config: Host user sync settings (`userSync` block)

        Returns:
            One ServerRequest per bid request; empty for no bid requests
        """
        if not bid_requests:
            return []

        context = BidderRequest.from_dict(bidder_request)
        sync_enabled = is_user_sync_enabled(sync_config, self.config.bidder_code)

        return [
            self.build_request(BidRequestEntry.from_dict(raw), context, sync_enabled)
            for raw in bid_requests
        ]

    def build_request(
        self,
        bid: BidRequestEntry,
        context: BidderRequest,
        sync_enabled: bool = False,
    ) -> ServerRequest:
        """
        Build the vendor request for a single bid request entry.

        Args:
            bid: Normalised bid request entry
            context: Normalised auction context
            sync_enabled: Whether user syncs are allowed for this adapter

        Returns:
            ServerRequest for the vendor endpoint
        """
        with AuctionLogContext(bid.auction_id):
            metadata = self.metadata_resolver.resolve(
                VideoParams.from_dict(bid.video_params),
                ContentSignals.from_ortb2(context.ortb2),
            )
            with_credentials = self.consent_evaluator.is_credentialed_request_allowed(
                context.gdpr
            )

            request = ServerRequest(
                url=self.config.endpoint_url,
                options=RequestOptions(with_credentials=with_credentials),
                data={
                    "pbv": self.config.library_version,
                    "userSyncEnabled": sync_enabled,
                    "bidder_request": context.to_dict(),
                    "config": self._build_config(bid),
                    "request": bid.to_dict(),
                    "video_metadata": metadata.to_dict(),
                    "ortb": build_ortb_request(bid, context),
                },
            )

            self._logger.debug(
                "Bid request built",
                bid_id=bid.bid_id,
                ad_unit_code=bid.ad_unit_code,
                with_credentials=with_credentials,
            )
            return request

    def _build_config(self, bid: BidRequestEntry) -> dict[str, Any]:
        """Publisher credentials forwarded to the endpoint."""
        config = {"api_key": bid.api_key}
        ts = bid.params.get("dmTs")
        if ts is not None:
            config["ts"] = ts
        return config


def build_requests(
    bid_requests: Optional[list[dict[str, Any]]],
    bidder_request: Optional[dict[str, Any]] = None,
    sync_config: Union[UserSyncConfig, dict[str, Any], None] = None,
    config: Optional[AdapterConfig] = None,
) -> list[ServerRequest]:
    """
    Convenience function to build vendor requests for an auction round.

    Args:
        bid_requests: Validated bid requests for this adapter
        bidder_request: Auction context
        sync_config: Host user sync settings
        config: Adapter configuration (loaded from YAML if None)

    Returns:
        List of ServerRequest
    """
    return RequestBuilder(config=config).build_requests(
        bid_requests, bidder_request, sync_config
    )
