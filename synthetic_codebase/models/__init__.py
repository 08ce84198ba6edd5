"""
Data models and configuration classes for the sanitizer.
"""

from .config import (
    SanitizerConfig, RewriteConfig, ScoringConfig, ScoreBand,
    ObservabilityConfig, StorageConfig
)
from .results import (
    CategoryReport, RewriteReport, TransformationResult, TransformationDetails,
    SecurityMetrics, DiffSummary, Sanitized, Failed, TransformationOutcome
)
from .observability import HealthStatus, SystemMetrics, LogContext

__all__ = [
    "SanitizerConfig",
    "RewriteConfig",
    "ScoringConfig",
    "ScoreBand",
    "ObservabilityConfig",
    "StorageConfig",
    "CategoryReport",
    "RewriteReport",
    "TransformationResult",
    "TransformationDetails",
    "SecurityMetrics",
    "DiffSummary",
    "Sanitized",
    "Failed",
    "TransformationOutcome",
    "HealthStatus",
    "SystemMetrics",
    "LogContext",
]
