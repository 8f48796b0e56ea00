"""
Adapter Privacy Module - GDPR TCF and GPP consent handling.

Decides whether bid requests may be sent with credentials.
"""

from src.dmx.privacy.consent_models import (
    GDPRConsent,
    GPPConsent,
    PurposeRequirement,
    RestrictionType,
    TCFPurpose,
    VendorData,
)
from src.dmx.privacy.consent_evaluator import (
    ConsentDecision,
    ConsentEvaluator,
    DecisionReason,
    is_credentialed_request_allowed,
)

__all__ = [
    'GDPRConsent',
    'GPPConsent',
    'PurposeRequirement',
    'RestrictionType',
    'TCFPurpose',
    'VendorData',
    'ConsentDecision',
    'ConsentEvaluator',
    'DecisionReason',
    'is_credentialed_request_allowed',
]
