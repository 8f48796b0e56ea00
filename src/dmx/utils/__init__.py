"""Adapter Utilities."""

from .constants import (
    BIDDER_CODE,
    DEFAULT_ENDPOINT_URL,
    DEFAULT_GVL_ID,
    REQUIRED_PURPOSES,
)
from .id_generator import generate_request_id, is_request_id

__all__ = [
    'BIDDER_CODE',
    'DEFAULT_ENDPOINT_URL',
    'DEFAULT_GVL_ID',
    'REQUIRED_PURPOSES',
    'generate_request_id',
    'is_request_id',
]
