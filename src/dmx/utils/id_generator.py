"""
ID generation utilities for the adapter.

Provides identifiers for outbound OpenRTB requests, which must be unique
for every request built in an auction round.
"""

import uuid


def generate_request_id() -> str:
    """
    Generate a unique OpenRTB request ID.

    Returns:
        A random UUID4 string
        Example: "1b4e28ba-2fa1-11d2-883f-0016d3cca427"
    """
    return str(uuid.uuid4())


def is_request_id(value: object) -> bool:
    """Check if a value looks like an ID produced by generate_request_id."""
    if not isinstance(value, str):
        return False
    try:
        return uuid.UUID(value).version == 4
    except ValueError:
        return False
