"""
Consent signal models for privacy compliance.

Supports:
- GDPR TCF v2 (Transparency and Consent Framework), legacy and structured
  vendor data as handed over by the host's consent management module
- GPP (Global Privacy Platform), with fallback to the OpenRTB regs object
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional


class TCFPurpose(IntEnum):
    """IAB TCF v2 Purpose definitions."""
    STORE_ACCESS = 1           # Store and/or access information on a device
    BASIC_ADS = 2              # Use limited data to select advertising
    PERSONALIZED_ADS_PROFILE = 3  # Create profiles for personalised advertising
    PERSONALIZED_ADS = 4       # Use profiles to select personalised advertising
    PERSONALIZED_CONTENT_PROFILE = 5  # Create profiles to personalise content
    PERSONALIZED_CONTENT = 6   # Use profiles to select personalised content
    AD_MEASUREMENT = 7         # Measure advertising performance
    CONTENT_MEASUREMENT = 8    # Measure content performance
    MARKET_RESEARCH = 9        # Understand audiences through statistics
    PRODUCT_DEVELOPMENT = 10   # Develop and improve services


class RestrictionType(IntEnum):
    """Publisher restriction types (TCF v2 PubRestrictionEntry)."""
    NOT_ALLOWED = 0
    REQUIRE_CONSENT = 1
    REQUIRE_LEGITIMATE_INTEREST = 2


class PurposeRequirement(Enum):
    """Legal basis a purpose must be covered by."""
    CONSENT_REQUIRED = "consent_required"
    LEGITIMATE_INTEREST_ACCEPTED = "legitimate_interest_accepted"  # consent OR LI
    LEGITIMATE_INTEREST_REQUIRED = "legitimate_interest_required"
    NOT_ALLOWED = "not_allowed"


# Default requirement per required purpose, before publisher restrictions
PURPOSE_REQUIREMENTS: dict[int, PurposeRequirement] = {
    TCFPurpose.STORE_ACCESS: PurposeRequirement.CONSENT_REQUIRED,
    TCFPurpose.BASIC_ADS: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
    TCFPurpose.PERSONALIZED_ADS_PROFILE: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
    TCFPurpose.PERSONALIZED_ADS: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
    TCFPurpose.AD_MEASUREMENT: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
    TCFPurpose.MARKET_RESEARCH: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
    TCFPurpose.PRODUCT_DEVELOPMENT: PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED,
}

RESTRICTION_REQUIREMENTS: dict[RestrictionType, PurposeRequirement] = {
    RestrictionType.NOT_ALLOWED: PurposeRequirement.NOT_ALLOWED,
    RestrictionType.REQUIRE_CONSENT: PurposeRequirement.CONSENT_REQUIRED,
    RestrictionType.REQUIRE_LEGITIMATE_INTEREST: PurposeRequirement.LEGITIMATE_INTEREST_REQUIRED,
}


def _to_int(value: Any) -> Optional[int]:
    """Parse an int id from an int or a numeric string key."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _parse_flags(raw: Any) -> dict[int, bool]:
    """
    Parse an id -> flag register.

    Only a literal True counts as set; anything else is False.
    """
    flags = {}
    for key, flag in _as_dict(raw).items():
        parsed = _to_int(key)
        if parsed is not None:
            flags[parsed] = flag is True
    return flags


def _parse_restrictions(raw: Any) -> dict[tuple[int, int], RestrictionType]:
    """Flatten publisher.restrictions into (purpose_id, vendor_id) -> type."""
    restrictions = {}
    for purpose_key, vendors in _as_dict(raw).items():
        purpose_id = _to_int(purpose_key)
        if purpose_id is None:
            continue
        for vendor_key, restriction in _as_dict(vendors).items():
            vendor_id = _to_int(vendor_key)
            restriction_value = _to_int(restriction)
            if vendor_id is None or restriction_value is None:
                continue
            try:
                restrictions[(purpose_id, vendor_id)] = RestrictionType(restriction_value)
            except ValueError:
                # Unknown restriction types are ignored
                continue
    return restrictions


@dataclass(frozen=True)
class VendorData:
    """
    Structured TCF v2 data decoded by the consent management platform.

    Registers that are missing from the payload are empty, meaning no
    purpose or vendor is covered through them.
    """
    has_global_consent: bool = False
    purpose_consents: dict[int, bool] = field(default_factory=dict)
    purpose_legitimate_interests: dict[int, bool] = field(default_factory=dict)
    vendor_consents: dict[int, bool] = field(default_factory=dict)
    publisher_restrictions: dict[tuple[int, int], RestrictionType] = field(
        default_factory=dict
    )

    @classmethod
    def from_dict(cls, data: Any) -> "VendorData":
        """Create from the host's `gdprConsent.vendorData` object."""
        data = _as_dict(data)
        purpose = _as_dict(data.get("purpose"))
        vendor = _as_dict(data.get("vendor"))
        publisher = _as_dict(data.get("publisher"))

        return cls(
            has_global_consent=data.get("hasGlobalConsent") is True,
            purpose_consents=_parse_flags(purpose.get("consents")),
            purpose_legitimate_interests=_parse_flags(
                purpose.get("legitimateInterests")
            ),
            vendor_consents=_parse_flags(vendor.get("consents")),
            publisher_restrictions=_parse_restrictions(publisher.get("restrictions")),
        )

    def has_purpose_consent(self, purpose_id: int) -> bool:
        """Check if consent exists for a specific purpose."""
        return self.purpose_consents.get(purpose_id, False)

    def has_legitimate_interest(self, purpose_id: int) -> bool:
        """Check if legitimate interest is established for a purpose."""
        return self.purpose_legitimate_interests.get(purpose_id, False)

    def has_vendor_consent(self, vendor_id: int) -> bool:
        """Check if consent exists for a specific vendor."""
        return self.vendor_consents.get(vendor_id, False)

    def get_restriction(
        self, purpose_id: int, vendor_id: int
    ) -> Optional[RestrictionType]:
        """Get the publisher restriction for a purpose and vendor, if any."""
        return self.publisher_restrictions.get((purpose_id, vendor_id))


@dataclass(frozen=True)
class GDPRConsent:
    """
    GDPR consent payload for an auction round.

    API version 1 carries only the legacy string and applicability flag;
    version 2 may also carry structured vendor data.
    """
    consent_string: str = ""
    api_version: int = 1
    gdpr_applies: bool = False
    vendor_data: Optional[VendorData] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["GDPRConsent"]:
        """
        Create from the host's `gdprConsent` object.

        Returns None when no consent object was supplied.
        """
        if not isinstance(data, dict):
            return None

        consent_string = data.get("consentString")
        vendor_data = data.get("vendorData")

        return cls(
            consent_string=consent_string if isinstance(consent_string, str) else "",
            api_version=_to_int(data.get("apiVersion")) or 1,
            gdpr_applies=bool(data.get("gdprApplies")),
            vendor_data=VendorData.from_dict(vendor_data)
            if isinstance(vendor_data, dict)
            else None,
        )

    @property
    def is_structured(self) -> bool:
        """Check if this is a TCF v2 payload."""
        return self.api_version == 2


@dataclass(frozen=True)
class GPPConsent:
    """
    Global Privacy Platform (GPP) consent signal.

    The host provides it as `gppConsent`; when absent, the OpenRTB
    `regs.gpp` / `regs.gpp_sid` fields are used instead.
    """
    gpp_string: str = ""
    applicable_sections: tuple[int, ...] = ()

    @classmethod
    def from_ortb2_regs(cls, regs: Any) -> "GPPConsent":
        """Build from an OpenRTB 2.6 regs object."""
        regs = _as_dict(regs)
        gpp = regs.get("gpp")
        gpp_sid = regs.get("gpp_sid")
        return cls(
            gpp_string=gpp if isinstance(gpp, str) else "",
            applicable_sections=tuple(gpp_sid) if isinstance(gpp_sid, list) else (),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's `gppConsent` shape."""
        return {
            "gppString": self.gpp_string,
            "applicableSections": list(self.applicable_sections),
        }
