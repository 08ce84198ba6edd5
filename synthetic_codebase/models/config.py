"""
Configuration classes for the synthetic codebase sanitizer.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from ..exceptions import ConfigurationException


FAMILY_NAMES = [
    "business_vocabulary",
    "urls",
    "api_endpoints",
    "sensitive_data",
    "method_names",
    "type_names",
]


def _default_profile_intensities() -> Dict[str, float]:
    return {"paranoid": 0.9, "balanced": 0.7, "performance": 0.4}


def _default_weights() -> Dict[str, float]:
    return {
        "business_vocabulary": 0.3,
        "urls": 0.2,
        "api_endpoints": 0.2,
        "sensitive_data": 0.15,
        "method_names": 0.1,
        "type_names": 0.05,
    }


def _default_fallbacks() -> Dict[str, float]:
    # A family with nothing to redact counts as a baseline, not as perfect.
    return {
        "business_vocabulary": 0.5,
        "urls": 1.0,
        "api_endpoints": 1.0,
        "sensitive_data": 1.0,
        "method_names": 1.0,
        "type_names": 1.0,
    }


@dataclass
class ScoreBand:
    """Linear score derived from a rate: clamp(base +/- value * span, floor, cap)."""

    base: float
    span: float
    floor: float = 0.0
    cap: float = 100.0

    def validate(self, name: str) -> None:
        """Validate the band bounds."""
        for label, value in (("base", self.base), ("span", self.span),
                             ("floor", self.floor), ("cap", self.cap)):
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigurationException(f"{name}.{label} must be a finite number")

        if not 0 <= self.floor <= self.cap <= 100:
            raise ConfigurationException(
                f"{name} requires 0 <= floor <= cap <= 100, got floor={self.floor} cap={self.cap}"
            )

    def to_dict(self) -> Dict[str, float]:
        return {"base": self.base, "span": self.span, "floor": self.floor, "cap": self.cap}


@dataclass
class ScoringConfig:
    """Tuning constants that turn pattern counts into percentage scores."""

    weights: Dict[str, float] = field(default_factory=_default_weights)
    fallbacks: Dict[str, float] = field(default_factory=_default_fallbacks)

    privacy: ScoreBand = field(default_factory=lambda: ScoreBand(65.0, 33.0, 0.0, 98.0))
    leakage: ScoreBand = field(default_factory=lambda: ScoreBand(35.0, 34.0, 1.0, 100.0))
    competitive: ScoreBand = field(default_factory=lambda: ScoreBand(25.0, 24.0, 1.0, 100.0))
    ai_parity: ScoreBand = field(default_factory=lambda: ScoreBand(96.5, 8.0, 0.0, 99.0))

    compliance_rate_threshold: float = 0.4
    compliance_vocabulary_ratio: float = 0.3

    def validate(self) -> None:
        """Validate scoring configuration parameters."""
        for mapping_name, mapping in (("weights", self.weights), ("fallbacks", self.fallbacks)):
            missing = [name for name in FAMILY_NAMES if name not in mapping]
            if missing:
                raise ConfigurationException(f"{mapping_name} missing families: {missing}")

            unknown = [name for name in mapping if name not in FAMILY_NAMES]
            if unknown:
                raise ConfigurationException(f"{mapping_name} has unknown families: {unknown}")

            for name, value in mapping.items():
                if not 0.0 <= value <= 1.0:
                    raise ConfigurationException(
                        f"{mapping_name}['{name}'] must be between 0 and 1"
                    )

        total = sum(self.weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ConfigurationException(f"weights must sum to 1.0, got {total:.6f}")

        self.privacy.validate("privacy")
        self.leakage.validate("leakage")
        self.competitive.validate("competitive")
        self.ai_parity.validate("ai_parity")

        if not 0.0 <= self.compliance_rate_threshold <= 1.0:
            raise ConfigurationException("compliance_rate_threshold must be between 0 and 1")

        if not 0.0 <= self.compliance_vocabulary_ratio <= 1.0:
            raise ConfigurationException("compliance_vocabulary_ratio must be between 0 and 1")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": dict(self.weights),
            "fallbacks": dict(self.fallbacks),
            "privacy": self.privacy.to_dict(),
            "leakage": self.leakage.to_dict(),
            "competitive": self.competitive.to_dict(),
            "ai_parity": self.ai_parity.to_dict(),
            "compliance_rate_threshold": self.compliance_rate_threshold,
            "compliance_vocabulary_ratio": self.compliance_vocabulary_ratio,
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ScoringConfig":
        """Create scoring configuration from a dictionary, keeping defaults for omitted keys."""
        config = cls()
        if "weights" in config_dict:
            config.weights = dict(config_dict["weights"])
        if "fallbacks" in config_dict:
            config.fallbacks = dict(config_dict["fallbacks"])
        for band in ("privacy", "leakage", "competitive", "ai_parity"):
            if band in config_dict:
                setattr(config, band, ScoreBand(**config_dict[band]))
        for key in ("compliance_rate_threshold", "compliance_vocabulary_ratio"):
            if key in config_dict:
                setattr(config, key, config_dict[key])
        return config


@dataclass
class RewriteConfig:
    """Rewrite pipeline configuration."""

    default_profile: str = "balanced"
    profile_intensities: Dict[str, float] = field(default_factory=_default_profile_intensities)

    # Optional JSON rule table replacing the built-in catalog
    catalog_path: Optional[str] = None

    # 0 disables the limit
    max_input_chars: int = 100_000

    # Share of rules allowed to be skipped before a transformation is reported as failed
    max_skipped_rule_ratio: float = 0.0

    def validate(self) -> None:
        """Validate rewrite configuration parameters."""
        if not self.profile_intensities:
            raise ConfigurationException("profile_intensities must not be empty")

        for name, intensity in self.profile_intensities.items():
            if not 0.0 < intensity <= 1.0:
                raise ConfigurationException(
                    f"Intensity for profile '{name}' must be in (0, 1], got {intensity}"
                )

        if self.default_profile not in self.profile_intensities:
            raise ConfigurationException(
                f"Invalid default_profile '{self.default_profile}'. "
                f"Must be one of: {list(self.profile_intensities)}"
            )

        if self.max_input_chars < 0:
            raise ConfigurationException("max_input_chars must be 0 or greater")

        if not 0.0 <= self.max_skipped_rule_ratio <= 1.0:
            raise ConfigurationException("max_skipped_rule_ratio must be between 0 and 1")


@dataclass
class ObservabilityConfig:
    """Observability configuration for monitoring and logging."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    # Metrics
    metrics_enabled: bool = True

    # Health checks
    health_check_enabled: bool = True
    memory_threshold_mb: int = 1000
    cpu_threshold_percent: float = 80.0

    def validate(self) -> None:
        """Validate observability configuration parameters."""
        valid_log_levels = ["DEBUG", "INFO", "WARN", "ERROR", "FATAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ConfigurationException(
                f"Invalid log_level '{self.log_level}'. Must be one of: {valid_log_levels}"
            )

        valid_log_formats = ["json", "text"]
        if self.log_format not in valid_log_formats:
            raise ConfigurationException(
                f"Invalid log_format '{self.log_format}'. Must be one of: {valid_log_formats}"
            )

        if self.memory_threshold_mb <= 0:
            raise ConfigurationException(
                "memory_threshold_mb must be greater than 0"
            )

        if not 0 < self.cpu_threshold_percent <= 100:
            raise ConfigurationException(
                "cpu_threshold_percent must be between 0 and 100"
            )


@dataclass
class StorageConfig:
    """Result store configuration."""

    store_type: Optional[str] = None  # None, "memory" or "local"
    storage_path: Optional[str] = None

    def validate(self) -> None:
        """Validate storage configuration parameters."""
        valid_store_types = [None, "memory", "local"]
        if self.store_type not in valid_store_types:
            raise ConfigurationException(
                f"Invalid store_type '{self.store_type}'. Must be one of: {valid_store_types}"
            )

        if self.store_type == "local" and not self.storage_path:
            raise ConfigurationException(
                "storage_path is required when store_type is 'local'"
            )


@dataclass
class SanitizerConfig:
    """Main configuration class for the sanitizer."""

    rewrite: Optional[RewriteConfig] = None
    scoring: Optional[ScoringConfig] = None
    observability: Optional[ObservabilityConfig] = None
    storage: Optional[StorageConfig] = None

    def __post_init__(self):
        """Fill in default sections and validate."""
        if self.rewrite is None:
            self.rewrite = RewriteConfig()
        if self.scoring is None:
            self.scoring = ScoringConfig()
        if self.storage is None:
            self.storage = StorageConfig()

        self.validate()

    def validate(self) -> None:
        """Validate every configuration section."""
        self.rewrite.validate()
        self.scoring.validate()
        self.storage.validate()
        if self.observability:
            self.observability.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "rewrite": {
                "default_profile": self.rewrite.default_profile,
                "profile_intensities": dict(self.rewrite.profile_intensities),
                "catalog_path": self.rewrite.catalog_path,
                "max_input_chars": self.rewrite.max_input_chars,
                "max_skipped_rule_ratio": self.rewrite.max_skipped_rule_ratio,
            },
            "scoring": self.scoring.to_dict(),
            "observability": self._observability_to_dict(),
            "storage": {
                "store_type": self.storage.store_type,
                "storage_path": self.storage.storage_path,
            },
        }

    def _observability_to_dict(self) -> Optional[Dict[str, Any]]:
        if not self.observability:
            return None

        return {
            "log_level": self.observability.log_level,
            "log_format": self.observability.log_format,
            "log_file": self.observability.log_file,
            "metrics_enabled": self.observability.metrics_enabled,
            "health_check_enabled": self.observability.health_check_enabled,
            "memory_threshold_mb": self.observability.memory_threshold_mb,
            "cpu_threshold_percent": self.observability.cpu_threshold_percent,
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SanitizerConfig":
        """Create configuration from dictionary."""
        rewrite = RewriteConfig(**config_dict["rewrite"]) if config_dict.get("rewrite") else None
        scoring = ScoringConfig.from_dict(config_dict["scoring"]) if config_dict.get("scoring") else None
        observability = (
            ObservabilityConfig(**config_dict["observability"])
            if config_dict.get("observability") else None
        )
        storage = StorageConfig(**config_dict["storage"]) if config_dict.get("storage") else None

        return cls(
            rewrite=rewrite,
            scoring=scoring,
            observability=observability,
            storage=storage
        )
