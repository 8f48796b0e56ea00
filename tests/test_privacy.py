"""Tests for TCF consent evaluation of credentialed requests."""

import pytest

from src.dmx.privacy.consent_models import (
    GDPRConsent,
    GPPConsent,
    PurposeRequirement,
    RestrictionType,
    VendorData,
)
from src.dmx.privacy.consent_evaluator import (
    ConsentEvaluator,
    DecisionReason,
    effective_requirement,
    is_credentialed_request_allowed,
    is_purpose_satisfied,
)

VENDOR_ID = 573
ALL_PURPOSES = {str(p): True for p in range(1, 11)}


def make_consent(vendor_data=None, api_version=2, gdpr_applies=True):
    """Build a GDPRConsent from host-shaped vendor data."""
    payload = {
        "apiVersion": api_version,
        "consentString": "xxx",
        "gdprApplies": gdpr_applies,
    }
    if vendor_data is not None:
        payload["vendorData"] = vendor_data
    return GDPRConsent.from_dict(payload)


@pytest.fixture
def evaluator():
    """Create an evaluator for the adapter's vendor ID."""
    return ConsentEvaluator(vendor_id=VENDOR_ID)


@pytest.fixture
def full_vendor_data():
    """Vendor data with every purpose consented and vendor consent."""
    return {
        "hasGlobalConsent": False,
        "purpose": {"consents": dict(ALL_PURPOSES)},
        "vendor": {"consents": {"573": True}},
    }


class TestGDPRConsentParsing:
    """Tests for normalising the host's gdprConsent object."""

    def test_missing_consent_is_none(self):
        """Non-dict payloads should produce no consent object."""
        assert GDPRConsent.from_dict(None) is None
        assert GDPRConsent.from_dict("abc") is None

    def test_defaults(self):
        """Empty payload falls back to API v1, GDPR not applying."""
        consent = GDPRConsent.from_dict({})
        assert consent.api_version == 1
        assert consent.gdpr_applies is False
        assert consent.consent_string == ""
        assert consent.vendor_data is None
        assert consent.is_structured is False

    def test_vendor_data_registers(self):
        """String keys should be parsed into integer ids."""
        vendor_data = VendorData.from_dict({
            "purpose": {
                "consents": {"1": True, "2": False},
                "legitimateInterests": {3: True},
            },
            "vendor": {"consents": {"573": True}},
        })
        assert vendor_data.has_purpose_consent(1) is True
        assert vendor_data.has_purpose_consent(2) is False
        assert vendor_data.has_legitimate_interest(3) is True
        assert vendor_data.has_vendor_consent(573) is True
        assert vendor_data.has_vendor_consent(1) is False

    def test_only_literal_true_counts(self):
        """Truthy non-bool flags should not count as consent."""
        vendor_data = VendorData.from_dict({
            "purpose": {"consents": {"1": 1, "2": "true"}},
            "hasGlobalConsent": "yes",
        })
        assert vendor_data.has_purpose_consent(1) is False
        assert vendor_data.has_purpose_consent(2) is False
        assert vendor_data.has_global_consent is False

    def test_publisher_restrictions(self):
        """Restrictions should be keyed by (purpose, vendor)."""
        vendor_data = VendorData.from_dict({
            "publisher": {
                "restrictions": {
                    "2": {"573": 0},
                    "7": {"573": 2, "12": 1},
                    "9": {"573": 7},  # unknown type
                }
            }
        })
        assert vendor_data.get_restriction(2, 573) is RestrictionType.NOT_ALLOWED
        assert vendor_data.get_restriction(7, 573) is RestrictionType.REQUIRE_LEGITIMATE_INTEREST
        assert vendor_data.get_restriction(7, 12) is RestrictionType.REQUIRE_CONSENT
        assert vendor_data.get_restriction(9, 573) is None
        assert vendor_data.get_restriction(1, 573) is None


class TestGPPConsent:
    """Tests for the GPP fallback from OpenRTB regs."""

    def test_from_regs(self):
        """Should read gpp and gpp_sid."""
        gpp = GPPConsent.from_ortb2_regs({"gpp": "xx", "gpp_sid": [6, 7]})
        assert gpp.to_dict() == {"gppString": "xx", "applicableSections": [6, 7]}

    def test_missing_regs(self):
        """Missing regs should give empty values."""
        assert GPPConsent.from_ortb2_regs(None).to_dict() == {
            "gppString": "",
            "applicableSections": [],
        }


class TestEffectiveRequirement:
    """Tests for the purpose requirement resolution."""

    def test_purpose_1_requires_consent(self):
        """Storage access needs consent by default."""
        assert (
            effective_requirement(1, VENDOR_ID, VendorData())
            is PurposeRequirement.CONSENT_REQUIRED
        )

    @pytest.mark.parametrize("purpose_id", [2, 3, 4, 7, 9, 10])
    def test_other_purposes_accept_legitimate_interest(self, purpose_id):
        """Other required purposes accept consent or legitimate interest."""
        assert (
            effective_requirement(purpose_id, VENDOR_ID, VendorData())
            is PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED
        )

    @pytest.mark.parametrize("restriction,expected", [
        (0, PurposeRequirement.NOT_ALLOWED),
        (1, PurposeRequirement.CONSENT_REQUIRED),
        (2, PurposeRequirement.LEGITIMATE_INTEREST_REQUIRED),
    ])
    def test_restriction_overrides_default(self, restriction, expected):
        """A publisher restriction replaces the default requirement."""
        vendor_data = VendorData.from_dict({
            "publisher": {"restrictions": {"2": {"573": restriction}}}
        })
        assert effective_requirement(2, VENDOR_ID, vendor_data) is expected

    def test_restriction_for_other_vendor_ignored(self):
        """Restrictions on another vendor do not apply."""
        vendor_data = VendorData.from_dict({
            "publisher": {"restrictions": {"2": {"12": 0}}}
        })
        assert (
            effective_requirement(2, VENDOR_ID, vendor_data)
            is PurposeRequirement.LEGITIMATE_INTEREST_ACCEPTED
        )


class TestPurposeSatisfied:
    """Tests for checking a purpose against the registers."""

    def test_li_required_rejects_consent_only(self):
        """Consent alone does not satisfy an LI-only requirement."""
        vendor_data = VendorData.from_dict({"purpose": {"consents": {"2": True}}})
        assert is_purpose_satisfied(
            2, PurposeRequirement.LEGITIMATE_INTEREST_REQUIRED, vendor_data
        ) is False

    def test_consent_required_rejects_li_only(self):
        """Legitimate interest alone does not satisfy a consent requirement."""
        vendor_data = VendorData.from_dict(
            {"purpose": {"legitimateInterests": {"2": True}}}
        )
        assert is_purpose_satisfied(
            2, PurposeRequirement.CONSENT_REQUIRED, vendor_data
        ) is False

    def test_not_allowed_never_satisfied(self):
        """A disallowed purpose is never satisfied."""
        vendor_data = VendorData.from_dict({"purpose": {"consents": ALL_PURPOSES}})
        assert is_purpose_satisfied(
            2, PurposeRequirement.NOT_ALLOWED, vendor_data
        ) is False


class TestConsentEvaluator:
    """Tests for the credentialed request decision."""

    def test_no_consent_allowed(self, evaluator):
        """No consent object means GDPR does not apply."""
        decision = evaluator.evaluate(None)
        assert decision.allowed is True
        assert decision.reason == DecisionReason.GDPR_NOT_APPLICABLE

    def test_api_v1_allowed(self, evaluator):
        """Legacy consent payloads are not evaluated."""
        consent = make_consent({"vendor": {"consents": {}}}, api_version=1)
        assert evaluator.is_credentialed_request_allowed(consent) is True

    def test_gdpr_not_applying_allowed(self, evaluator):
        """Consent is not needed when GDPR does not apply."""
        consent = make_consent({"vendor": {"consents": {}}}, gdpr_applies=False)
        assert evaluator.is_credentialed_request_allowed(consent) is True

    def test_global_consent_allowed(self, evaluator):
        """Global consent wins over every other field."""
        consent = make_consent({
            "hasGlobalConsent": True,
            "vendor": {"consents": {"573": False}},
            "publisher": {"restrictions": {"1": {"573": 0}}},
        })
        decision = evaluator.evaluate(consent)
        assert decision.allowed is True
        assert decision.reason == DecisionReason.GLOBAL_CONSENT

    def test_missing_vendor_data_rejected(self, evaluator):
        """Applicable v2 consent without vendor data has no vendor consent."""
        decision = evaluator.evaluate(make_consent())
        assert decision.allowed is False
        assert decision.reason == DecisionReason.NO_VENDOR_CONSENT

    def test_no_vendor_consent_rejected(self, evaluator):
        """Purpose consents without vendor consent are not enough."""
        consent = make_consent({
            "purpose": {"consents": dict(ALL_PURPOSES)},
            "vendor": {"consents": {"573": False}},
        })
        decision = evaluator.evaluate(consent)
        assert decision.allowed is False
        assert decision.reason == DecisionReason.NO_VENDOR_CONSENT

    def test_full_consent_allowed(self, evaluator, full_vendor_data):
        """Every purpose consented with vendor consent is allowed."""
        decision = evaluator.evaluate(make_consent(full_vendor_data))
        assert decision.allowed is True
        assert decision.reason == DecisionReason.CONSENT_SATISFIED

    def test_consent_and_legitimate_interest_allowed(self, evaluator):
        """Purpose 1 by consent plus the others by LI is allowed."""
        consent = make_consent({
            "purpose": {
                "consents": {"1": True},
                "legitimateInterests": {
                    "2": True, "3": True, "4": True, "7": True, "9": True, "10": True,
                },
            },
            "vendor": {"consents": {"573": True}},
        })
        assert evaluator.is_credentialed_request_allowed(consent) is True

    def test_purpose_1_by_legitimate_interest_rejected(self, evaluator):
        """Purpose 1 cannot be covered by legitimate interest."""
        consent = make_consent({
            "purpose": {
                "consents": {},
                "legitimateInterests": dict(ALL_PURPOSES),
            },
            "vendor": {"consents": {"573": True}},
        })
        decision = evaluator.evaluate(consent)
        assert decision.allowed is False
        assert decision.reason == DecisionReason.PURPOSE_NOT_SATISFIED
        assert decision.purpose_id == 1

    def test_missing_purpose_rejected(self, evaluator):
        """A required purpose with neither basis is rejected."""
        purposes = dict(ALL_PURPOSES)
        purposes["9"] = False
        consent = make_consent({
            "purpose": {"consents": purposes},
            "vendor": {"consents": {"573": True}},
        })
        decision = evaluator.evaluate(consent)
        assert decision.allowed is False
        assert decision.purpose_id == 9

    def test_optional_purposes_not_checked(self, evaluator):
        """Purposes 5, 6 and 8 are not required."""
        purposes = dict(ALL_PURPOSES)
        for purpose_id in ("5", "6", "8"):
            purposes[purpose_id] = False
        consent = make_consent({
            "purpose": {"consents": purposes},
            "vendor": {"consents": {"573": True}},
        })
        assert evaluator.is_credentialed_request_allowed(consent) is True

    def test_restriction_not_allowed_rejected(self, evaluator, full_vendor_data):
        """Restriction type 0 on a satisfied purpose still rejects."""
        full_vendor_data["publisher"] = {"restrictions": {"2": {"573": 0}}}
        decision = evaluator.evaluate(make_consent(full_vendor_data))
        assert decision.allowed is False
        assert decision.reason == DecisionReason.PURPOSE_NOT_ALLOWED
        assert decision.purpose_id == 2

    def test_restriction_require_consent(self, evaluator):
        """Restriction type 1 turns an LI purpose into consent only."""
        vendor_data = {
            "purpose": {
                "consents": {"1": True},
                "legitimateInterests": {
                    "2": True, "3": True, "4": True, "7": True, "9": True, "10": True,
                },
            },
            "vendor": {"consents": {"573": True}},
            "publisher": {"restrictions": {"7": {"573": 1}}},
        }
        decision = evaluator.evaluate(make_consent(vendor_data))
        assert decision.allowed is False
        assert decision.purpose_id == 7

    def test_restriction_require_legitimate_interest(self, evaluator, full_vendor_data):
        """Restriction type 2 ignores consent for the purpose."""
        full_vendor_data["publisher"] = {"restrictions": {"3": {"573": 2}}}
        decision = evaluator.evaluate(make_consent(full_vendor_data))
        assert decision.allowed is False
        assert decision.purpose_id == 3

        full_vendor_data["purpose"]["legitimateInterests"] = {"3": True}
        assert evaluator.is_credentialed_request_allowed(
            make_consent(full_vendor_data)
        ) is True

    def test_other_vendor_id(self, full_vendor_data):
        """The decision is bound to the configured vendor ID."""
        consent = make_consent(full_vendor_data)
        assert is_credentialed_request_allowed(consent, vendor_id=999) is False
        assert is_credentialed_request_allowed(consent) is True

    def test_decision_details_logged(self, evaluator, monkeypatch):
        """The evaluation log entry carries the rejection details."""
        entries = []

        class RecordingLogger:
            def debug(self, event, **fields):
                entries.append((event, fields))

        monkeypatch.setattr(evaluator, "_logger", RecordingLogger())
        decision = evaluator.evaluate(make_consent({"vendor": {"consents": {"573": False}}}))

        [(event, fields)] = entries
        assert event == "Consent evaluated"
        assert fields["reason"] == "NO_VENDOR_CONSENT"
        assert fields["details"] == decision.details
        assert "573" in fields["details"]
