"""
OpenRTB 2.6 request builder.

Builds the OpenRTB bid request embedded in every outbound request, from the
auction's first party `ortb2` fragment and the bid request entry.
"""

import copy
from typing import Any, Optional

from ..models.bid_request import BidderRequest, BidRequestEntry
from ..utils.constants import ORTB_VIDEO_PARAMS, VIDEO
from ..utils.id_generator import generate_request_id

DEFAULT_FLOOR_CURRENCY = "USD"


def build_ortb_request(
    bid: BidRequestEntry,
    bidder_request: BidderRequest,
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build an OpenRTB bid request for a single bid request entry.

    Args:
        bid: The bid request entry
        bidder_request: Auction context holding the `ortb2` fragment
        request_id: Request ID (generated if not provided)

    Returns:
        OpenRTB 2.x bid request dict with a single impression
    """
    ortb = copy.deepcopy(bidder_request.ortb2)

    ortb["id"] = request_id or generate_request_id()
    ortb["imp"] = [build_imp(bid)]
    ortb["test"] = 0

    # Auction timeout wins over the first party tmax
    if bidder_request.timeout is not None:
        ortb["tmax"] = bidder_request.timeout

    return ortb


def build_imp(bid: BidRequestEntry) -> dict[str, Any]:
    """Build the impression object of a bid request entry."""
    imp: dict[str, Any] = {
        "id": bid.bid_id,
        "secure": 1,
    }

    video = build_video(bid.video_media_type)
    if video:
        imp["video"] = video

    floor = get_bid_floor(bid)
    if floor is not None:
        imp["bidfloor"], imp["bidfloorcur"] = floor

    return imp


def build_video(video_media_type: dict[str, Any]) -> dict[str, Any]:
    """
    Extract OpenRTB video attributes from `mediaTypes.video`.

    `playerSize` is mapped to `w`/`h` when those are not set.
    """
    video = {
        key: copy.deepcopy(video_media_type[key])
        for key in ORTB_VIDEO_PARAMS
        if key in video_media_type
    }

    if "w" not in video and "h" not in video:
        size = _first_player_size(video_media_type.get("playerSize"))
        if size is not None:
            video["w"], video["h"] = size

    return video


def _first_player_size(player_size: Any) -> Optional[tuple[int, int]]:
    """Return (w, h) from a `[w, h]` or `[[w, h], ...]` player size."""
    if not isinstance(player_size, list) or not player_size:
        return None
    if isinstance(player_size[0], list):
        player_size = player_size[0]
    if (
        len(player_size) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in player_size)
    ):
        return player_size[0], player_size[1]
    return None


def get_bid_floor(bid: BidRequestEntry) -> Optional[tuple[float, str]]:
    """
    Query the price floor of a bid request entry.

    The host's floor callable receives the same lookup parameters as in
    the browser (currency, media type, size). A missing, empty or
    malformed floor means no floor.
    """
    if bid.get_floor is None:
        return None

    try:
        floor = bid.get_floor({
            "currency": DEFAULT_FLOOR_CURRENCY,
            "mediaType": VIDEO,
            "size": "*",
        })
    except (TypeError, ValueError):
        return None

    if not isinstance(floor, dict):
        return None

    value = floor.get("floor")
    currency = floor.get("currency")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not isinstance(currency, str) or not currency:
        return None

    return value, currency
