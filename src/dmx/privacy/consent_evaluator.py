"""
Consent evaluator for credentialed requests.

Decides whether an outbound bid request may carry cookies, based on:
- GDPR applicability and TCF API version
- Global consent
- Vendor consent for the adapter's GVL ID
- Per-purpose consent / legitimate interest, narrowed by publisher restrictions
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..logging import privacy_logger
from ..utils.constants import DEFAULT_GVL_ID, REQUIRED_PURPOSES
from .consent_models import (
    GDPRConsent,
    PURPOSE_REQUIREMENTS,
    RESTRICTION_REQUIREMENTS,
    PurposeRequirement,
    VendorData,
)


class DecisionReason(Enum):
    """Reasons behind a credentialed-request decision."""

    GDPR_NOT_APPLICABLE = auto()
    GLOBAL_CONSENT = auto()
    CONSENT_SATISFIED = auto()
    NO_VENDOR_CONSENT = auto()
    PURPOSE_NOT_ALLOWED = auto()
    PURPOSE_NOT_SATISFIED = auto()


@dataclass(frozen=True)
class ConsentDecision:
    """Result of consent evaluation for a vendor."""

    allowed: bool
    reason: DecisionReason
    purpose_id: Optional[int] = None
    details: str = ""


def effective_requirement(
    purpose_id: int,
    vendor_id: int,
    vendor_data: VendorData,
) -> PurposeRequirement:
    """
    Resolve the legal basis required for a purpose.

    A publisher restriction for the (purpose, vendor) pair replaces the
    default requirement of the purpose.
    """
    restriction = vendor_data.get_restriction(purpose_id, vendor_id)
    if restriction is not None:
        return RESTRICTION_REQUIREMENTS[restriction]
    return PURPOSE_REQUIREMENTS.get(
        purpose_id, PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED
    )


def is_purpose_satisfied(
    purpose_id: int,
    requirement: PurposeRequirement,
    vendor_data: VendorData,
) -> bool:
    """Check a purpose against the consent and legitimate interest registers."""
    if requirement is PurposeRequirement.NOT_ALLOWED:
        return False
    if requirement is PurposeRequirement.CONSENT_REQUIRED:
        return vendor_data.has_purpose_consent(purpose_id)
    if requirement is PurposeRequirement.LEGITIMATE_INTEREST_REQUIRED:
        return vendor_data.has_legitimate_interest(purpose_id)
    return vendor_data.has_purpose_consent(
        purpose_id
    ) or vendor_data.has_legitimate_interest(purpose_id)


class ConsentEvaluator:
    """
    Evaluates TCF consent for the adapter's vendor.

    Stateless: every call re-derives the decision from the consent payload
    of the current auction round.
    """

    def __init__(
        self,
        vendor_id: int = DEFAULT_GVL_ID,
        required_purposes: tuple[int, ...] = REQUIRED_PURPOSES,
    ):
        """
        Initialize the evaluator.

        Args:
            vendor_id: IAB Global Vendor List ID of the adapter
            required_purposes: TCF purposes that must all be satisfied
        """
        self.vendor_id = vendor_id
        self.required_purposes = required_purposes
        self._logger = privacy_logger()

    def evaluate(self, consent: Optional[GDPRConsent]) -> ConsentDecision:
        """
        Decide whether credentialed requests are allowed.

        Args:
            consent: GDPR consent for the auction round, or None

        Returns:
            ConsentDecision with the outcome and its reason
        """
        decision = self._evaluate(consent)
        self._logger.debug(
            "Consent evaluated",
            vendor_id=self.vendor_id,
            allowed=decision.allowed,
            reason=decision.reason.name,
            purpose_id=decision.purpose_id,
            details=decision.details,
        )
        return decision

    def is_credentialed_request_allowed(self, consent: Optional[GDPRConsent]) -> bool:
        """Check if cookies may be sent with requests for this consent."""
        return self.evaluate(consent).allowed

    def _evaluate(self, consent: Optional[GDPRConsent]) -> ConsentDecision:
        if consent is None or not consent.is_structured or not consent.gdpr_applies:
            return ConsentDecision(
                allowed=True,
                reason=DecisionReason.GDPR_NOT_APPLICABLE,
            )

        vendor_data = consent.vendor_data or VendorData()

        if vendor_data.has_global_consent:
            return ConsentDecision(allowed=True, reason=DecisionReason.GLOBAL_CONSENT)

        if not vendor_data.has_vendor_consent(self.vendor_id):
            return ConsentDecision(
                allowed=False,
                reason=DecisionReason.NO_VENDOR_CONSENT,
                details=f"No vendor consent for GVL ID {self.vendor_id}",
            )

        for purpose_id in self.required_purposes:
            requirement = effective_requirement(purpose_id, self.vendor_id, vendor_data)

            if requirement is PurposeRequirement.NOT_ALLOWED:
                return ConsentDecision(
                    allowed=False,
                    reason=DecisionReason.PURPOSE_NOT_ALLOWED,
                    purpose_id=purpose_id,
                    details=f"Publisher disallows TCF purpose {purpose_id}",
                )

            if not is_purpose_satisfied(purpose_id, requirement, vendor_data):
                return ConsentDecision(
                    allowed=False,
                    reason=DecisionReason.PURPOSE_NOT_SATISFIED,
                    purpose_id=purpose_id,
                    details=(
                        f"TCF purpose {purpose_id} not covered "
                        f"({requirement.value})"
                    ),
                )

        return ConsentDecision(allowed=True, reason=DecisionReason.CONSENT_SATISFIED)


def is_credentialed_request_allowed(
    consent: Optional[GDPRConsent],
    vendor_id: int = DEFAULT_GVL_ID,
) -> bool:
    """
    Convenience function to evaluate consent for a vendor.

    Args:
        consent: GDPR consent for the auction round, or None
        vendor_id: IAB Global Vendor List ID

    Returns:
        True if cookies may be sent with the request
    """
    return ConsentEvaluator(vendor_id=vendor_id).is_credentialed_request_allowed(consent)
