"""
Synthetic Codebase - rewrites source code to strip business-specific vocabulary,
endpoints, identifiers, and secrets, and scores how much the rewrite reduced them.

This package provides an ordered rule catalog, a profile-driven rewriter, a
metrics calculator producing privacy and risk scores, and a manager that ties
them together with structured logging and an optional result store.
"""

from .manager import SanitizationManager
from .models import (
    SanitizerConfig, RewriteConfig, ScoringConfig, ObservabilityConfig, StorageConfig,
    TransformationResult, SecurityMetrics, TransformationDetails, RewriteReport,
    Sanitized, Failed, DiffSummary, HealthStatus, SystemMetrics
)
from .services import (
    RuleCatalog, Rule, RuleCategory, IntensityResolver, IntensityProfile,
    Rewriter, MetricsCalculator, StaticDemoResponseProvider
)
from .factory import ResultStoreFactory, RuleCatalogFactory
from .exceptions import (
    SanitizerException,
    InvalidInputError,
    RuleApplicationWarning,
    MetricsComputationError,
    ConfigurationException,
    CatalogException,
    StorageException
)

__version__ = "0.1.0"
__author__ = "Synthetic Codebase Team"

__all__ = [
    "SanitizationManager",
    "SanitizerConfig",
    "RewriteConfig",
    "ScoringConfig",
    "ObservabilityConfig",
    "StorageConfig",
    "TransformationResult",
    "SecurityMetrics",
    "TransformationDetails",
    "RewriteReport",
    "Sanitized",
    "Failed",
    "DiffSummary",
    "HealthStatus",
    "SystemMetrics",
    "RuleCatalog",
    "Rule",
    "RuleCategory",
    "IntensityResolver",
    "IntensityProfile",
    "Rewriter",
    "MetricsCalculator",
    "StaticDemoResponseProvider",
    "ResultStoreFactory",
    "RuleCatalogFactory",
    "SanitizerException",
    "InvalidInputError",
    "RuleApplicationWarning",
    "MetricsComputationError",
    "ConfigurationException",
    "CatalogException",
    "StorageException",
]
