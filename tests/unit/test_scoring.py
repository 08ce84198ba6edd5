"""
Unit tests for the metrics calculator.
"""

import pytest

from synthetic_codebase.services.scoring import (
    MetricsCalculator, round_half_up, structural_delta
)
from synthetic_codebase.models.config import ScoringConfig, ScoreBand
from synthetic_codebase.exceptions import ConfigurationException, MetricsComputationError


SCENARIO_A = (
    "function getCustomerData(customerId) { return fetch('https://api.stripe.com/v1/customers/' "
    "+ customerId); }"
)
SCENARIO_A_OUTPUT = (
    "function fetchEntityData(entityIdentifier) { return fetch('https://api.example.com/endpoint' "
    "+ entityIdentifier); }"
)
PLAIN = "function add(a, b) { return a + b; }"


class TestHelpers:
    """Test cases for rounding and delta helpers."""

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(92.5) == 93
        assert round_half_up(4.49) == 4
        assert round_half_up(0.0) == 0

    def test_structural_delta(self):
        assert structural_delta("abcd", "ab") == 0.5
        assert structural_delta("ab", "abcd") == 1.0
        assert structural_delta("same", "same") == 0.0

    def test_structural_delta_empty_original(self):
        assert structural_delta("", "anything") == 0.0


class TestMetricsCalculator:
    """Test cases for MetricsCalculator."""

    def setup_method(self):
        self.calculator = MetricsCalculator()

    def test_unchanged_text_scores_baseline(self):
        """Text with nothing to redact scores the fallback baseline."""
        metrics = self.calculator.score(PLAIN, PLAIN)

        assert metrics.reduction_rate == pytest.approx(0.85)
        assert metrics.privacy_score == 93
        assert metrics.leakage_risk == 6
        assert metrics.competitive_risk == 5
        assert metrics.ai_parity_estimate == 97
        assert metrics.compliance_ready is True

    def test_full_redaction(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A_OUTPUT)
        details = metrics.transformation_details

        assert metrics.reduction_rate == pytest.approx(1.0)
        assert metrics.privacy_score == 98
        assert metrics.leakage_risk == 1
        assert metrics.competitive_risk == 1
        # delta = 8 / 107
        assert metrics.ai_parity_estimate == 96
        assert metrics.compliance_ready is True

        assert details.business_terms_reduced == 5
        assert details.urls_anonymized == 1
        assert details.api_endpoints_generalized == 1
        assert details.method_names_normalized == 1
        assert details.sensitive_data_obfuscated == 0
        assert details.overall_transformation_rate == 100

    def test_no_redaction_of_sensitive_text(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A)

        # Only the families absent from the text contribute: 0.15 + 0.05
        assert metrics.reduction_rate == pytest.approx(0.2)
        assert metrics.privacy_score == 72
        assert metrics.leakage_risk == 28
        assert metrics.competitive_risk == 20
        assert metrics.compliance_ready is False

    def test_empty_input(self):
        metrics = self.calculator.score("", "")

        assert metrics.privacy_score == 93
        assert metrics.ai_parity_estimate == 97

    def test_scores_bounded(self):
        samples = [
            ("", "x" * 500),
            ("x" * 500, ""),
            (SCENARIO_A, ""),
            ("alice@acme.com", "alice@acme.com bob@acme.com carol@acme.com"),
        ]
        for original, transformed in samples:
            metrics = self.calculator.score(original, transformed)
            for value in (metrics.privacy_score, metrics.leakage_risk,
                          metrics.competitive_risk, metrics.ai_parity_estimate):
                assert isinstance(value, int)
                assert 0 <= value <= 100
            assert 0.0 <= metrics.reduction_rate <= 1.0

    def test_growth_ratio_floored_at_zero(self):
        ratios = self.calculator.reduction_ratios(
            {"sensitive_data": 1}, {"sensitive_data": 3}
        )

        assert ratios["sensitive_data"] == 0.0

    def test_fallbacks_for_absent_families(self):
        ratios = self.calculator.reduction_ratios({}, {})

        assert ratios["business_vocabulary"] == 0.5
        assert ratios["urls"] == 1.0

    def test_compliance_by_vocabulary_reduction(self):
        """A low rate still passes when business vocabulary drops by over 70%."""
        assert self.calculator._compliance_ready(
            0.3, {"business_vocabulary": 10}, {"business_vocabulary": 2}
        ) is True
        assert self.calculator._compliance_ready(
            0.3, {"business_vocabulary": 10}, {"business_vocabulary": 3}
        ) is False
        assert self.calculator._compliance_ready(
            0.3, {"business_vocabulary": 0}, {"business_vocabulary": 0}
        ) is False
        assert self.calculator._compliance_ready(0.41, {}, {}) is True

    def test_custom_band(self):
        config = ScoringConfig(privacy=ScoreBand(50.0, 50.0, 0.0, 100.0))
        calculator = MetricsCalculator(config)

        assert calculator.score(SCENARIO_A, SCENARIO_A_OUTPUT).privacy_score == 100

    def test_invalid_config_rejected(self):
        config = ScoringConfig()
        config.weights["urls"] = 0.9

        with pytest.raises(ConfigurationException):
            MetricsCalculator(config)

    def test_non_finite_score_raises(self):
        self.calculator.config.privacy = ScoreBand(float("nan"), 33.0)

        with pytest.raises(MetricsComputationError) as exc_info:
            self.calculator.score(PLAIN, PLAIN)

        assert "privacy_score is not finite" in str(exc_info.value)

    def test_metrics_to_dict(self):
        metrics = self.calculator.score(SCENARIO_A, SCENARIO_A_OUTPUT)

        data = metrics.to_dict()

        assert data["privacy_score"] == 98
        assert data["transformation_details"]["business_terms_reduced"] == 5
        assert data["transformation_details"]["counts_after"]["urls"] == 0
