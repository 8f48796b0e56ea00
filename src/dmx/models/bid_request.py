"""
Bid request models handed over by the auction host.

The host passes loosely shaped dictionaries; these models normalise them
once so request building can rely on fields being present and typed.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..privacy.consent_models import GDPRConsent, GPPConsent
from ..utils.constants import VIDEO


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


# Video attributes always echoed to the endpoint, with their fallback values
VIDEO_REQUEST_DEFAULTS: dict[str, Any] = {
    'api': [],
    'mimes': [],
    'minduration': 0,
    'maxduration': 0,
    'playbackmethod': [],
    'plcmt': None,
    'protocols': [],
    'skip': 0,
    'skipafter': 0,
    'skipmin': 0,
    'startdelay': None,
    'w': 0,
    'h': 0,
}


@dataclass(frozen=True)
class BidRequestEntry:
    """A single ad unit bid request for this adapter."""

    auction_id: str = ''
    bid_id: Any = None
    ad_unit_code: str = ''
    media_types: dict[str, Any] = field(default_factory=dict)
    sizes: list = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)
    get_floor: Optional[Callable[..., Any]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BidRequestEntry":
        """Create from a host bid request object."""
        data = _as_dict(data)
        sizes = data.get('sizes')
        get_floor = data.get('getFloor')

        return cls(
            auction_id=data.get('auctionId') or '',
            bid_id=data.get('bidId'),
            ad_unit_code=data.get('adUnitCode') or '',
            media_types=_as_dict(data.get('mediaTypes')),
            sizes=list(sizes) if isinstance(sizes, list) else [],
            params=_as_dict(data.get('params')),
            get_floor=get_floor if callable(get_floor) else None,
        )

    @property
    def api_key(self) -> str:
        """Publisher API key for the vendor endpoint."""
        api_key = self.params.get('apiKey')
        return api_key if isinstance(api_key, str) else ''

    @property
    def video_params(self) -> dict[str, Any]:
        """Publisher-declared video metadata (`params.video`)."""
        return _as_dict(self.params.get('video'))

    @property
    def video_media_type(self) -> dict[str, Any]:
        """The `mediaTypes.video` object, empty if not a video ad unit."""
        return _as_dict(self.media_types.get(VIDEO))

    def video_request(self) -> dict[str, Any]:
        """
        The `mediaTypes.video` object with every echoed attribute set.

        Attributes the host leaves out (or sets to None) take their
        default; any other host attribute is kept as is.
        """
        video = copy.deepcopy(self.video_media_type)
        for key, default in VIDEO_REQUEST_DEFAULTS.items():
            if video.get(key) is None:
                video[key] = copy.deepcopy(default)
        return video

    def to_dict(self) -> dict[str, Any]:
        """Echo of the entry fields sent to the vendor endpoint."""
        return {
            'auctionId': self.auction_id,
            'bidId': self.bid_id if self.bid_id is not None else '',
            'adUnitCode': self.ad_unit_code,
            'mediaTypes': {
                VIDEO: self.video_request(),
            },
            'sizes': copy.deepcopy(self.sizes),
        }


@dataclass(frozen=True)
class BidderRequest:
    """
    Auction-level context shared by every bid request of the round.

    Consent payloads are kept as received so they can be forwarded
    untouched; typed views are derived on demand.
    """

    referer_info: dict[str, Any] = field(default_factory=lambda: {'page': ''})
    usp_consent: str = ''
    gdpr_consent: dict[str, Any] = field(
        default_factory=lambda: {
            'apiVersion': 1,
            'consentString': '',
            'gdprApplies': False,
        }
    )
    gpp_consent: Optional[dict[str, Any]] = None
    ortb2: dict[str, Any] = field(default_factory=dict)
    timeout: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BidderRequest":
        """Create from the host's bidder request object."""
        data = _as_dict(data)
        defaults = cls()

        referer_info = data.get('refererInfo')
        usp_consent = data.get('uspConsent')
        gdpr_consent = data.get('gdprConsent')
        gpp_consent = data.get('gppConsent')
        timeout = data.get('timeout')

        return cls(
            referer_info=referer_info
            if isinstance(referer_info, dict)
            else defaults.referer_info,
            usp_consent=usp_consent if isinstance(usp_consent, str) else '',
            gdpr_consent=gdpr_consent
            if isinstance(gdpr_consent, dict)
            else defaults.gdpr_consent,
            gpp_consent=gpp_consent if isinstance(gpp_consent, dict) else None,
            ortb2=_as_dict(data.get('ortb2')),
            timeout=timeout
            if isinstance(timeout, int) and not isinstance(timeout, bool)
            else None,
        )

    @property
    def gdpr(self) -> Optional[GDPRConsent]:
        """Typed view of the GDPR consent payload."""
        return GDPRConsent.from_dict(self.gdpr_consent)

    @property
    def gpp(self) -> dict[str, Any]:
        """GPP consent payload, falling back to `ortb2.regs`."""
        if self.gpp_consent is not None:
            return self.gpp_consent
        return GPPConsent.from_ortb2_regs(self.ortb2.get('regs')).to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Auction context forwarded to the vendor endpoint."""
        return copy.deepcopy({
            'refererInfo': self.referer_info,
            'uspConsent': self.usp_consent,
            'gdprConsent': self.gdpr_consent,
            'gppConsent': self.gpp,
        })
