"""Interpretation of vendor endpoint responses."""

from typing import Any


def interpret_response(server_response: Any) -> list[dict[str, Any]]:
    """
    Turn a vendor response into bids.

    The endpoint answers with at most one bid per request; a body without
    a positive price means no bid.

    Args:
        server_response: Transport response, `{"body": {...}}`

    Returns:
        List holding the bid, or an empty list
    """
    if not isinstance(server_response, dict):
        return []

    body = server_response.get("body")
    if isinstance(body, dict) and body.get("cpm"):
        return [body]

    return []
