"""
Metrics calculator: turns before/after pattern counts into privacy scores.
"""

import math
from typing import Dict, Optional

from ..exceptions import MetricsComputationError
from ..models.config import FAMILY_NAMES, ScoreBand, ScoringConfig
from ..models.results import SecurityMetrics, TransformationDetails
from .detectors import PatternDetector


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def structural_delta(original_text: str, transformed_text: str) -> float:
    """Relative length change of the rewrite. Empty originals have no delta."""
    if not original_text:
        return 0.0
    return abs(len(original_text) - len(transformed_text)) / len(original_text)


class MetricsCalculator:
    """Scores how much a rewrite reduced sensitive-pattern density."""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        detector: Optional[PatternDetector] = None
    ):
        """
        Initialize the calculator.

        Args:
            config: Scoring constants, defaults to the calibrated set
            detector: Pattern detector, defaults to the built-in families
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        self.detector = detector or PatternDetector()

    def family_counts(self, text: str) -> Dict[str, int]:
        """Count every tracked family in text."""
        counts = self.detector.count(text)
        return {name: counts.get(name, 0) for name in FAMILY_NAMES}

    def reduction_ratios(
        self,
        counts_before: Dict[str, int],
        counts_after: Dict[str, int]
    ) -> Dict[str, float]:
        """
        Per-family reduction ratio.

        A family absent from the original scores its configured fallback
        instead of dividing by zero.
        """
        ratios = {}
        for name in FAMILY_NAMES:
            before = counts_before.get(name, 0)
            after = counts_after.get(name, 0)
            if before > 0:
                ratios[name] = max(0.0, 1.0 - after / before)
            else:
                ratios[name] = self.config.fallbacks[name]
        return ratios

    def reduction_rate(
        self,
        counts_before: Dict[str, int],
        counts_after: Dict[str, int]
    ) -> float:
        """Composite reduction rate R, the weighted sum of family ratios."""
        ratios = self.reduction_ratios(counts_before, counts_after)
        rate = sum(self.config.weights[name] * ratios[name] for name in FAMILY_NAMES)
        return min(1.0, max(0.0, rate))

    def score(self, original_text: str, transformed_text: str) -> SecurityMetrics:
        """
        Score a rewrite.

        Args:
            original_text: Text before rewriting
            transformed_text: Text after rewriting

        Returns:
            Security metrics with every score in [0, 100]

        Raises:
            MetricsComputationError: If a score is not a finite number
        """
        counts_before = self.family_counts(original_text)
        counts_after = self.family_counts(transformed_text)
        ratios = self.reduction_ratios(counts_before, counts_after)
        rate = self.reduction_rate(counts_before, counts_after)
        delta = structural_delta(original_text, transformed_text)

        config = self.config
        privacy_score = self._band_score(config.privacy, rate, "privacy_score")
        leakage_risk = self._band_score(config.leakage, -rate, "leakage_risk")
        competitive_risk = self._band_score(config.competitive, -rate, "competitive_risk")
        ai_parity_estimate = self._band_score(config.ai_parity, -delta, "ai_parity_estimate")

        details = TransformationDetails(
            counts_before=counts_before,
            counts_after=counts_after,
            reduction_ratios=ratios,
            overall_transformation_rate=round_half_up(rate * 100)
        )

        return SecurityMetrics(
            privacy_score=privacy_score,
            leakage_risk=leakage_risk,
            competitive_risk=competitive_risk,
            ai_parity_estimate=ai_parity_estimate,
            compliance_ready=self._compliance_ready(rate, counts_before, counts_after),
            reduction_rate=rate,
            transformation_details=details
        )

    def _band_score(self, band: ScoreBand, signed_value: float, label: str) -> int:
        raw = band.base + signed_value * band.span
        if not math.isfinite(raw):
            raise MetricsComputationError(f"{label} is not finite: {raw}")

        clamped = min(band.cap, max(band.floor, raw))
        return round_half_up(clamped)

    def _compliance_ready(
        self,
        rate: float,
        counts_before: Dict[str, int],
        counts_after: Dict[str, int]
    ) -> bool:
        if rate > self.config.compliance_rate_threshold:
            return True

        before = counts_before.get("business_vocabulary", 0)
        after = counts_after.get("business_vocabulary", 0)
        return before > 0 and after < before * self.config.compliance_vocabulary_ratio
