"""
Security assessment: score ratings and pass/warning checks for a rewrite.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.results import SecurityMetrics
from . import vocabulary as vocab


_SECRET_MATCHERS = [re.compile(vocab.SECRET_PATTERNS[concern]) for concern in vocab.SECRET_ORDER]
_CANONICAL_CONSTANTS = set(vocab.PLACEHOLDER_CONSTANTS.values())


def rate_score(score: float, is_risk: bool = False) -> str:
    """
    Rate a percentage score.

    Args:
        score: Score in [0, 100]
        is_risk: True when lower is safer

    Returns:
        "good", "fair" or "poor"
    """
    if is_risk:
        if score <= 10:
            return "good"
        if score <= 25:
            return "fair"
        return "poor"

    if score >= 90:
        return "good"
    if score >= 70:
        return "fair"
    return "poor"


@dataclass
class SecurityCheck:
    """One named check of the assessment."""

    name: str
    status: str  # "pass" or "warning"
    description: str = ""

    @property
    def passed(self) -> bool:
        return self.status == "pass"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status, "description": self.description}


@dataclass
class SecurityAssessment:
    """Ratings and checks derived from security metrics."""

    privacy_rating: str
    leakage_rating: str
    competitive_rating: str
    checks: List[SecurityCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def warnings(self) -> List[SecurityCheck]:
        return [check for check in self.checks if not check.passed]

    def get_check(self, name: str) -> Optional[SecurityCheck]:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "privacy_rating": self.privacy_rating,
            "leakage_rating": self.leakage_rating,
            "competitive_rating": self.competitive_rating,
            "passed": self.passed,
            "checks": [check.to_dict() for check in self.checks]
        }


def count_secret_constants(text: str) -> int:
    """Count secret-shaped constants in text, ignoring canonical placeholders."""
    found = set()
    for matcher in _SECRET_MATCHERS:
        for match in matcher.finditer(text):
            if match.group(0) not in _CANONICAL_CONSTANTS:
                found.add(match.span())
    return len(found)


def _check(name: str, passed: bool, description: str) -> SecurityCheck:
    return SecurityCheck(name, "pass" if passed else "warning", description)


def assess(metrics: SecurityMetrics, transformed_text: Optional[str] = None) -> SecurityAssessment:
    """
    Build the security assessment for a scored rewrite.

    Checks are derived from the after-counts. When the rewritten text is
    given, configuration masking is checked against it directly;
    otherwise it follows the sensitive-data family.

    Args:
        metrics: Scores of the rewrite
        transformed_text: Optional rewritten text

    Returns:
        Security assessment
    """
    details = metrics.transformation_details
    after = details.counts_after
    before = details.counts_before

    if transformed_text is not None:
        configuration_masked = count_secret_constants(transformed_text) == 0
    else:
        configuration_masked = after.get("sensitive_data", 0) == 0

    business_before = before.get("business_vocabulary", 0)
    business_after = after.get("business_vocabulary", 0)

    checks = [
        _check("pii_removed", after.get("sensitive_data", 0) == 0,
               "No contact details or secret values remain"),
        _check("endpoints_anonymized",
               after.get("urls", 0) == 0 and after.get("api_endpoints", 0) == 0,
               "External service URLs and API paths generalized"),
        _check("configuration_masked", configuration_masked,
               "Secret configuration constants replaced with placeholders"),
        _check("domain_terminology_reduced",
               business_before == 0 or business_after < business_before,
               "Industry-specific terms replaced with neutral equivalents"),
        _check("compliance_ready", metrics.compliance_ready,
               "Reduction rate or vocabulary reduction crossed the compliance threshold"),
    ]

    return SecurityAssessment(
        privacy_rating=rate_score(metrics.privacy_score),
        leakage_rating=rate_score(metrics.leakage_risk, is_risk=True),
        competitive_rating=rate_score(metrics.competitive_risk, is_risk=True),
        checks=checks
    )
