"""
Unit tests for the security assessment.
"""

from synthetic_codebase.services.assessment import (
    assess, rate_score, count_secret_constants, SecurityCheck
)
from synthetic_codebase.services.scoring import MetricsCalculator


SCENARIO_A = (
    "function getCustomerData(customerId) { return fetch('https://api.stripe.com/v1/customers/' "
    "+ customerId); }"
)
SCENARIO_A_OUTPUT = (
    "function fetchEntityData(entityIdentifier) { return fetch('https://api.example.com/endpoint' "
    "+ entityIdentifier); }"
)


class TestRateScore:
    """Test cases for rate_score."""

    def test_privacy_ratings(self):
        assert rate_score(98) == "good"
        assert rate_score(90) == "good"
        assert rate_score(70) == "fair"
        assert rate_score(69) == "poor"

    def test_risk_ratings(self):
        assert rate_score(1, is_risk=True) == "good"
        assert rate_score(10, is_risk=True) == "good"
        assert rate_score(25, is_risk=True) == "fair"
        assert rate_score(26, is_risk=True) == "poor"


class TestCountSecretConstants:
    """Test cases for count_secret_constants."""

    def test_counts_secrets(self):
        assert count_secret_constants("STRIPE_API_KEY = x\nDATABASE_URL = y") == 2

    def test_overlapping_detectors_counted_once(self):
        # Matched by both the credential and the vendor detector
        assert count_secret_constants("STRIPE_API_KEY") == 1

    def test_placeholders_ignored(self):
        assert count_secret_constants("API_CREDENTIAL REMOTE_ENDPOINT AUTH_CONFIG") == 0


class TestAssess:
    """Test cases for assess."""

    def setup_method(self):
        self.calculator = MetricsCalculator()

    def test_clean_rewrite_passes(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A_OUTPUT)

        assessment = assess(metrics, SCENARIO_A_OUTPUT)

        assert assessment.privacy_rating == "good"
        assert assessment.leakage_rating == "good"
        assert assessment.competitive_rating == "good"
        assert assessment.passed is True
        assert assessment.warnings == []
        assert [check.name for check in assessment.checks] == [
            "pii_removed", "endpoints_anonymized", "configuration_masked",
            "domain_terminology_reduced", "compliance_ready",
        ]

    def test_untouched_text_warns(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A)

        assessment = assess(metrics)

        assert assessment.passed is False
        assert assessment.get_check("endpoints_anonymized").status == "warning"
        assert assessment.get_check("domain_terminology_reduced").passed is False
        assert assessment.get_check("compliance_ready").passed is False
        assert assessment.get_check("pii_removed").passed is True
        assert assessment.privacy_rating == "fair"
        assert assessment.leakage_rating == "poor"

    def test_configuration_masked_uses_text(self):
        text = "const KEY = STRIPE_API_KEY;"
        metrics = self.calculator.score(text, text)

        assert assess(metrics, text).get_check("configuration_masked").passed is False
        assert assess(metrics).get_check("configuration_masked").passed is False

    def test_get_missing_check(self):
        metrics = self.calculator.score("x", "x")

        assert assess(metrics).get_check("missing") is None

    def test_to_dict(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A_OUTPUT)

        data = assess(metrics).to_dict()

        assert data["passed"] is True
        assert data["checks"][0] == {
            "name": "pii_removed",
            "status": "pass",
            "description": "No contact details or secret values remain"
        }


class TestSecurityCheck:
    """Test cases for SecurityCheck."""

    def test_passed(self):
        assert SecurityCheck("a", "pass").passed is True
        assert SecurityCheck("a", "warning").passed is False
