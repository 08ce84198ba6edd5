"""
Service layer components for rule application, scoring, and observability.
"""

from .rules import Rule, RuleCategory
from .catalog import RuleCatalog
from .detectors import PatternDetector
from .intensity import IntensityResolver, IntensityProfile
from .rewriter import Rewriter
from .scoring import MetricsCalculator
from .diff import summarize_diff
from .assessment import assess, rate_score
from .demo_responses import StaticDemoResponseProvider
from .observability import ObservabilityManager

__all__ = [
    "Rule",
    "RuleCategory",
    "RuleCatalog",
    "PatternDetector",
    "IntensityResolver",
    "IntensityProfile",
    "Rewriter",
    "MetricsCalculator",
    "summarize_diff",
    "assess",
    "rate_score",
    "StaticDemoResponseProvider",
    "ObservabilityManager",
]
