"""Outbound request model consumed by the host's transport layer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RequestOptions:
    """Transport options for a request."""

    with_credentials: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's options shape."""
        return {'withCredentials': self.with_credentials}


@dataclass(frozen=True)
class ServerRequest:
    """
    A fully built request for the vendor endpoint.

    Produced once per bid request entry and never modified afterwards.
    """

    url: str
    data: dict[str, Any]
    options: RequestOptions = field(default_factory=RequestOptions)
    method: str = 'POST'

    @property
    def with_credentials(self) -> bool:
        """Whether cookies may be sent with the request."""
        return self.options.with_credentials

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'method': self.method,
            'url': self.url,
            'options': self.options.to_dict(),
            'data': self.data,
        }
