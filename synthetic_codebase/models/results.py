"""
Result models produced by the rewrite and scoring pipeline.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Union


@dataclass
class CategoryReport:
    """Applied/skipped accounting for one rule category."""

    category: str
    rules_applied: int = 0
    rules_skipped: int = 0
    replacements: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def rule_count(self) -> int:
        return self.rules_applied + self.rules_skipped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "rules_applied": self.rules_applied,
            "rules_skipped": self.rules_skipped,
            "replacements": self.replacements,
            "errors": list(self.errors)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryReport":
        return cls(
            category=data["category"],
            rules_applied=data.get("rules_applied", 0),
            rules_skipped=data.get("rules_skipped", 0),
            replacements=data.get("replacements", 0),
            errors=list(data.get("errors", []))
        )


@dataclass
class RewriteReport:
    """Per-category report returned alongside the transformed text."""

    categories: List[CategoryReport] = field(default_factory=list)

    @property
    def total_rules(self) -> int:
        return sum(report.rule_count for report in self.categories)

    @property
    def skipped_rules(self) -> int:
        return sum(report.rules_skipped for report in self.categories)

    @property
    def total_replacements(self) -> int:
        return sum(report.replacements for report in self.categories)

    @property
    def skipped_ratio(self) -> float:
        """Share of active rules that could not be applied."""
        if self.total_rules == 0:
            return 0.0
        return self.skipped_rules / self.total_rules

    @property
    def degraded(self) -> bool:
        return self.skipped_rules > 0

    def get(self, category: str) -> Optional[CategoryReport]:
        for report in self.categories:
            if report.category == category:
                return report
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": [report.to_dict() for report in self.categories],
            "total_rules": self.total_rules,
            "skipped_rules": self.skipped_rules,
            "total_replacements": self.total_replacements
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RewriteReport":
        return cls(categories=[CategoryReport.from_dict(item) for item in data.get("categories", [])])


@dataclass
class TransformationResult:
    """Original text, rewritten text, and how the rewrite was produced."""

    original_text: str
    transformed_text: str
    profile: str = "balanced"
    intensity: float = 0.7
    report: RewriteReport = field(default_factory=RewriteReport)
    language_hint: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.original_text != self.transformed_text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_text": self.original_text,
            "transformed_text": self.transformed_text,
            "profile": self.profile,
            "intensity": self.intensity,
            "report": self.report.to_dict(),
            "language_hint": self.language_hint
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformationResult":
        return cls(
            original_text=data["original_text"],
            transformed_text=data["transformed_text"],
            profile=data.get("profile", "balanced"),
            intensity=data.get("intensity", 0.7),
            report=RewriteReport.from_dict(data.get("report", {})),
            language_hint=data.get("language_hint")
        )


@dataclass
class TransformationDetails:
    """Raw before/after counts per tracked pattern family."""

    counts_before: Dict[str, int] = field(default_factory=dict)
    counts_after: Dict[str, int] = field(default_factory=dict)
    reduction_ratios: Dict[str, float] = field(default_factory=dict)
    overall_transformation_rate: int = 0

    def delta(self, family: str) -> int:
        """countBefore - countAfter for a family."""
        return self.counts_before.get(family, 0) - self.counts_after.get(family, 0)

    @property
    def business_terms_reduced(self) -> int:
        return self.delta("business_vocabulary")

    @property
    def urls_anonymized(self) -> int:
        return self.delta("urls")

    @property
    def api_endpoints_generalized(self) -> int:
        return self.delta("api_endpoints")

    @property
    def sensitive_data_obfuscated(self) -> int:
        return self.delta("sensitive_data")

    @property
    def method_names_normalized(self) -> int:
        return self.delta("method_names")

    @property
    def type_names_normalized(self) -> int:
        return self.delta("type_names")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "business_terms_reduced": self.business_terms_reduced,
            "urls_anonymized": self.urls_anonymized,
            "api_endpoints_generalized": self.api_endpoints_generalized,
            "sensitive_data_obfuscated": self.sensitive_data_obfuscated,
            "method_names_normalized": self.method_names_normalized,
            "type_names_normalized": self.type_names_normalized,
            "overall_transformation_rate": self.overall_transformation_rate,
            "counts_before": dict(self.counts_before),
            "counts_after": dict(self.counts_after),
            "reduction_ratios": dict(self.reduction_ratios)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformationDetails":
        return cls(
            counts_before=dict(data.get("counts_before", {})),
            counts_after=dict(data.get("counts_after", {})),
            reduction_ratios=dict(data.get("reduction_ratios", {})),
            overall_transformation_rate=data.get("overall_transformation_rate", 0)
        )


@dataclass
class SecurityMetrics:
    """Composite privacy assessment of a rewrite."""

    privacy_score: int
    leakage_risk: int
    competitive_risk: int
    ai_parity_estimate: int
    compliance_ready: bool
    reduction_rate: float
    transformation_details: TransformationDetails

    def to_dict(self) -> Dict[str, Any]:
        return {
            "privacy_score": self.privacy_score,
            "leakage_risk": self.leakage_risk,
            "competitive_risk": self.competitive_risk,
            "ai_parity_estimate": self.ai_parity_estimate,
            "compliance_ready": self.compliance_ready,
            "reduction_rate": self.reduction_rate,
            "transformation_details": self.transformation_details.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecurityMetrics":
        return cls(
            privacy_score=data["privacy_score"],
            leakage_risk=data["leakage_risk"],
            competitive_risk=data["competitive_risk"],
            ai_parity_estimate=data["ai_parity_estimate"],
            compliance_ready=data["compliance_ready"],
            reduction_rate=data["reduction_rate"],
            transformation_details=TransformationDetails.from_dict(data["transformation_details"])
        )


@dataclass
class DiffSummary:
    """Line and character level change statistics."""

    added_lines: int
    removed_lines: int
    changed_lines: int
    total_lines: int
    change_percentage: int
    character_change_percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "added_lines": self.added_lines,
            "removed_lines": self.removed_lines,
            "changed_lines": self.changed_lines,
            "total_lines": self.total_lines,
            "change_percentage": self.change_percentage,
            "character_change_percentage": self.character_change_percentage
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiffSummary":
        return cls(**data)


@dataclass
class Sanitized:
    """Successful transformation: rewritten text plus its scores."""

    result: TransformationResult
    metrics: SecurityMetrics
    diff: Optional[DiffSummary] = None
    correlation_id: Optional[str] = None

    succeeded = True

    @property
    def transformed_text(self) -> str:
        return self.result.transformed_text

    @property
    def report(self) -> RewriteReport:
        return self.result.report

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "sanitized",
            "result": self.result.to_dict(),
            "metrics": self.metrics.to_dict(),
            "diff": self.diff.to_dict() if self.diff else None,
            "correlation_id": self.correlation_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sanitized":
        return cls(
            result=TransformationResult.from_dict(data["result"]),
            metrics=SecurityMetrics.from_dict(data["metrics"]),
            diff=DiffSummary.from_dict(data["diff"]) if data.get("diff") else None,
            correlation_id=data.get("correlation_id")
        )


@dataclass
class Failed:
    """Transformation that must not be treated as sanitized.

    No rewritten text is carried so that partially redacted output cannot
    be mistaken for a clean result.
    """

    reason: str
    report: Optional[RewriteReport] = None
    correlation_id: Optional[str] = None

    succeeded = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "failed",
            "reason": self.reason,
            "report": self.report.to_dict() if self.report else None,
            "correlation_id": self.correlation_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Failed":
        return cls(
            reason=data["reason"],
            report=RewriteReport.from_dict(data["report"]) if data.get("report") else None,
            correlation_id=data.get("correlation_id")
        )


TransformationOutcome = Union[Sanitized, Failed]


def outcome_from_dict(data: Dict[str, Any]) -> TransformationOutcome:
    """Rebuild a stored outcome from its dictionary form."""
    if data.get("status") == "failed":
        return Failed.from_dict(data)
    return Sanitized.from_dict(data)
