"""
Video bid adapter for the Dailymotion header bidding endpoint.

Builds one request per video ad unit, carrying the resolved video
metadata, the OpenRTB request of the auction, and a credentials flag
derived from the user's TCF consent.
"""

from .adapter import DmxBidAdapter, RequestBuilder, build_ortb_request
from .config import AdapterConfig, AdapterConfigError, UserSyncConfig
from .metadata import MetadataResolver
from .models import BidderRequest, BidRequestEntry, ServerRequest, VideoMetadata
from .privacy import ConsentDecision, ConsentEvaluator

__version__ = '1.0.0'

__all__ = [
    'DmxBidAdapter',
    'RequestBuilder',
    'build_ortb_request',
    'AdapterConfig',
    'AdapterConfigError',
    'UserSyncConfig',
    'MetadataResolver',
    'ConsentEvaluator',
    'ConsentDecision',
    'BidRequestEntry',
    'BidderRequest',
    'ServerRequest',
    'VideoMetadata',
]
