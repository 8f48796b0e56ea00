"""
Bid Adapter Module

Key components:
    - DmxBidAdapter: Entry point driven by the auction host
    - RequestBuilder: Builds one vendor request per bid request
    - build_ortb_request(): OpenRTB request embedded in each vendor request
"""

from .bid_adapter import DmxBidAdapter
from .ortb_converter import build_imp, build_ortb_request, build_video, get_bid_floor
from .request_builder import RequestBuilder, build_requests
from .response import interpret_response
from .user_sync import get_user_syncs, is_user_sync_enabled
from .validation import is_bid_request_valid

__all__ = [
    "DmxBidAdapter",
    "RequestBuilder",
    "build_requests",
    "build_ortb_request",
    "build_imp",
    "build_video",
    "get_bid_floor",
    "interpret_response",
    "get_user_syncs",
    "is_user_sync_enabled",
    "is_bid_request_valid",
]
