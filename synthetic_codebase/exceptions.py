"""
Exception hierarchy for the synthetic codebase sanitizer.
"""

from typing import Optional


class SanitizerException(Exception):
    """Base exception for sanitizer operations."""
    
    def __init__(self, message: str, correlation_id: Optional[str] = None):
        super().__init__(message)
        self.correlation_id = correlation_id


class InvalidInputError(SanitizerException):
    """Raised when the source text is missing or not text-coercible."""
    pass


class RuleApplicationWarning(SanitizerException):
    """Raised when a single rewrite rule cannot compile or apply."""
    
    def __init__(
        self,
        message: str,
        rule_name: Optional[str] = None,
        category: Optional[str] = None,
        correlation_id: Optional[str] = None
    ):
        super().__init__(message, correlation_id)
        self.rule_name = rule_name
        self.category = category


class MetricsComputationError(SanitizerException):
    """Raised when a score cannot be derived from the pattern counts."""
    pass


class ConfigurationException(SanitizerException):
    """Raised when configuration is invalid."""
    pass


class CatalogException(ConfigurationException):
    """Raised when a rule table is malformed."""
    pass


class StorageException(SanitizerException):
    """Raised when result store operations fail."""
    pass
