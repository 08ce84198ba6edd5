"""
Main SanitizationManager orchestrator that coordinates all components.
"""

import contextlib
import time
from typing import Any, Dict, List, Optional, Union

from .models.config import SanitizerConfig
from .models.observability import create_log_context
from .models.results import (
    Failed, Sanitized, SecurityMetrics, TransformationOutcome, TransformationResult
)
from .services.assessment import SecurityAssessment, assess
from .services.catalog import RuleCatalog
from .services.diff import summarize_diff
from .services.intensity import IntensityResolver
from .services.observability import ObservabilityManager
from .services.rewriter import Rewriter, coerce_source_text
from .services.scoring import MetricsCalculator
from .storage.interface import ResultStore
from .factory import ResultStoreFactory, RuleCatalogFactory
from .exceptions import (
    InvalidInputError,
    MetricsComputationError,
    RuleApplicationWarning,
    StorageException
)


class SanitizationManager:
    """
    Main orchestrator that rewrites source text, scores the rewrite, and
    optionally stores the outcome under a session key.
    """

    def __init__(self, config: Optional[SanitizerConfig] = None):
        """
        Initialize the sanitization manager.

        Args:
            config: Sanitizer configuration, defaults to the built-in settings
        """
        self.config = config or SanitizerConfig()

        self.catalog = self._create_catalog()
        self.resolver = IntensityResolver(
            self.catalog,
            profile_intensities=self.config.rewrite.profile_intensities,
            default_profile=self.config.rewrite.default_profile
        )
        self.rewriter = Rewriter(self.catalog, self.resolver)
        self.calculator = MetricsCalculator(self.config.scoring)

        self.observability_manager = None
        if self.config.observability:
            self.observability_manager = ObservabilityManager(self.config.observability)

        self.result_store = self._create_result_store()

        if self.observability_manager:
            self._register_health_checks()

    def _create_catalog(self) -> RuleCatalog:
        """Create the rule catalog based on configuration."""
        return RuleCatalogFactory.create_catalog(self.config.rewrite)

    def _create_result_store(self) -> Optional[ResultStore]:
        """Create the result store based on configuration."""
        return ResultStoreFactory.create_result_store(
            self.config.storage, self.observability_manager
        )

    def _register_health_checks(self) -> None:
        """Register health checks for all components."""

        def catalog_health():
            invalid = self._invalid_rules()
            if invalid:
                return False, f"{len(invalid)} rules cannot compile", {"invalid_rules": invalid}
            return True, "Rule catalog is healthy", {
                "version": self.catalog.version,
                "categories": len(self.catalog),
                "rules": self.catalog.rule_count()
            }

        def result_store_health():
            if self.result_store is None:
                return True, "Result store not configured", {}
            healthy = self.result_store.health_check()
            return healthy, "Result store is healthy" if healthy else "Result store is unhealthy", {}

        self.observability_manager.register_health_check("rule_catalog", catalog_health)
        self.observability_manager.register_health_check("result_store", result_store_health)

    def _invalid_rules(self) -> List[str]:
        invalid = []
        for category in self.catalog:
            for rule in category.rules:
                try:
                    rule.compiled
                    rule.compiled_guard
                except RuleApplicationWarning:
                    invalid.append(f"{category.name}.{rule.name}")
        return invalid

    def _log(self, level: str, message: str, **kwargs) -> None:
        if self.observability_manager:
            self.observability_manager.log_event(level, message, **kwargs)

    def _timed(self, operation: str):
        if self.observability_manager:
            return self.observability_manager.time_operation(operation)
        return contextlib.nullcontext()

    def transform(
        self,
        source_text: Union[str, bytes],
        privacy_profile: Optional[str] = None,
        language_hint: Optional[str] = None,
        session_key: Optional[str] = None
    ) -> TransformationOutcome:
        """
        Rewrite source text and score the rewrite.

        Args:
            source_text: Text to sanitize, or UTF-8 bytes
            privacy_profile: "paranoid", "balanced" or "performance"; others fall back to the default
            language_hint: Optional language label, recorded only
            session_key: Optional key under which the outcome is stored

        Returns:
            Sanitized outcome, or Failed when rules were skipped beyond the
            configured tolerance or scoring failed

        Raises:
            InvalidInputError: If the source text is missing, not text, or too large
            StorageException: If a session key is given without a result store
        """
        correlation_id = None
        if self.observability_manager:
            log_context = create_log_context(
                operation="transform",
                component="SanitizationManager",
                session_key=session_key,
                profile=privacy_profile,
                language_hint=language_hint
            )
            correlation_id = log_context.correlation_id
            self.observability_manager.set_log_context(log_context)

        try:
            text = self._validate_input(source_text, correlation_id)

            if session_key is not None and self.result_store is None:
                raise StorageException(
                    "A session key was given but no result store is configured",
                    correlation_id
                )

            self._log("INFO", f"Starting transformation of {len(text)} characters")

            start = time.perf_counter()
            with self._timed("transform"):
                result = self.rewriter.transform(text, privacy_profile, language_hint)
                outcome = self._build_outcome(result, correlation_id)
            duration_ms = (time.perf_counter() - start) * 1000

            if self.observability_manager:
                self.observability_manager.record_transformation(
                    duration_ms,
                    replacements=result.report.total_replacements,
                    skipped_rules=result.report.skipped_rules,
                    failed=not outcome.succeeded,
                    profile=result.profile
                )

            if session_key is not None:
                self.result_store.set(session_key, outcome)
                self._log("DEBUG", f"Stored outcome under session key {session_key}")

            if outcome.succeeded:
                self._log(
                    "INFO",
                    f"Transformation complete: privacy score {outcome.metrics.privacy_score}",
                    profile=result.profile,
                    replacements=result.report.total_replacements,
                    duration_ms=round(duration_ms, 3)
                )
            else:
                self._log("ERROR", f"Transformation failed: {outcome.reason}")

            return outcome

        finally:
            if self.observability_manager:
                self.observability_manager.clear_log_context()

    def _validate_input(self, source_text: Union[str, bytes], correlation_id: Optional[str]) -> str:
        try:
            text = coerce_source_text(source_text)

            limit = self.config.rewrite.max_input_chars
            if limit and len(text) > limit:
                raise InvalidInputError(
                    f"Source text has {len(text)} characters, limit is {limit}"
                )
        except InvalidInputError as e:
            e.correlation_id = correlation_id
            self._log("ERROR", f"Rejected input: {str(e)}")
            if self.observability_manager:
                self.observability_manager.record_rejected_input()
            raise

        return text

    def _build_outcome(
        self,
        result: TransformationResult,
        correlation_id: Optional[str]
    ) -> TransformationOutcome:
        report = result.report

        for category_report in report.categories:
            for error in category_report.errors:
                self._log("WARN", f"Skipped rule in {category_report.category}: {error}",
                          category=category_report.category)

        tolerance = self.config.rewrite.max_skipped_rule_ratio
        if report.skipped_ratio > tolerance:
            return Failed(
                reason=(
                    f"{report.skipped_rules} of {report.total_rules} rules could not be applied "
                    f"(tolerance {tolerance:.0%})"
                ),
                report=report,
                correlation_id=correlation_id
            )

        try:
            metrics = self.calculator.score(result.original_text, result.transformed_text)
        except MetricsComputationError as e:
            return Failed(
                reason=f"Scoring failed: {str(e)}",
                report=report,
                correlation_id=correlation_id
            )

        return Sanitized(
            result=result,
            metrics=metrics,
            diff=summarize_diff(result.original_text, result.transformed_text),
            correlation_id=correlation_id
        )

    def rewrite(self, source_text: Union[str, bytes], privacy_profile: Optional[str] = None) -> str:
        """Rewrite text without scoring it."""
        return self.rewriter.rewrite(source_text, privacy_profile)

    def score(self, original_text: Union[str, bytes], transformed_text: Union[str, bytes]) -> SecurityMetrics:
        """
        Score an existing rewrite.

        Raises:
            InvalidInputError: If either text is not text-coercible
        """
        return self.calculator.score(
            coerce_source_text(original_text), coerce_source_text(transformed_text)
        )

    def assess(self, outcome: Sanitized) -> SecurityAssessment:
        """Build the security assessment of a sanitized outcome."""
        return assess(outcome.metrics, outcome.transformed_text)

    def get_result(self, session_key: str) -> Optional[TransformationOutcome]:
        """
        Retrieve the outcome stored under a session key.

        Raises:
            StorageException: If no result store is configured
        """
        if self.result_store is None:
            raise StorageException("No result store is configured")
        return self.result_store.get(session_key)

    def delete_result(self, session_key: str) -> bool:
        if self.result_store is None:
            raise StorageException("No result store is configured")
        return self.result_store.delete(session_key)

    def health_check(self) -> Dict[str, bool]:
        """
        Perform health check on all components.

        Returns:
            Dictionary with health status of each component
        """
        health_status = {"rule_catalog": not self._invalid_rules() and self.catalog.rule_count() > 0}

        if self.result_store is not None:
            try:
                health_status["result_store"] = self.result_store.health_check()
            except StorageException:
                health_status["result_store"] = False

        health_status["overall"] = all(health_status.values())
        return health_status

    def get_system_info(self) -> Dict[str, Any]:
        """Describe the configured pipeline."""
        return {
            "catalog_version": self.catalog.version,
            "categories": self.catalog.category_names(),
            "rule_count": self.catalog.rule_count(),
            "profiles": {profile.name: profile.intensity for profile in self.resolver.profiles()},
            "default_profile": self.resolver.default_profile,
            "store_type": self.config.storage.store_type,
            "observability_enabled": self.observability_manager is not None
        }

    def __repr__(self) -> str:
        return (
            f"SanitizationManager(catalog_version='{self.catalog.version}', "
            f"default_profile='{self.resolver.default_profile}', "
            f"store_type={self.config.storage.store_type!r})"
        )
