"""Adapter Models and Data Types."""

from .bid_request import BidderRequest, BidRequestEntry
from .server_request import RequestOptions, ServerRequest
from .video_metadata import VideoContext, VideoMetadata

__all__ = [
    "BidRequestEntry",
    "BidderRequest",
    "RequestOptions",
    "ServerRequest",
    "VideoContext",
    "VideoMetadata",
]
