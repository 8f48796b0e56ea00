"""Pre-flight checks on bid requests before any request is built."""

from typing import Any

from ..logging import adapter_logger
from ..utils.constants import BIDDER_CODE, INSTREAM, VIDEO


def is_bid_request_valid(bid: Any, bidder_code: str = BIDDER_CODE) -> bool:
    """
    Check whether a bid request can be served by this adapter.

    A bid request needs a publisher API key and an instream video ad unit.
    Banner-only and outstream ad units are rejected.

    Args:
        bid: Host bid request object
        bidder_code: Bidder code used in log entries

    Returns:
        True if the bid request is valid
    """
    logger = adapter_logger(bidder_code)

    if not isinstance(bid, dict):
        logger.error("Bid request rejected", reason="missing bid request")
        return False

    params = bid.get("params")
    api_key = params.get("apiKey") if isinstance(params, dict) else None
    if not isinstance(api_key, str) or not api_key:
        logger.error(
            "Bid request rejected",
            reason="apiKey must be set in params",
            bid_id=bid.get("bidId"),
        )
        return False

    media_types = bid.get("mediaTypes")
    video = media_types.get(VIDEO) if isinstance(media_types, dict) else None
    if not isinstance(video, dict):
        logger.error(
            "Bid request rejected",
            reason="only video media type is supported",
            bid_id=bid.get("bidId"),
        )
        return False

    context = video.get("context")
    if context is not None and context != INSTREAM:
        logger.error(
            "Bid request rejected",
            reason="only instream video context is supported",
            context=context,
            bid_id=bid.get("bidId"),
        )
        return False

    return True
