"""
Observability models for logging, metrics, and health reporting.
"""

import uuid
from datetime import datetime
from typing import Dict, Optional, Any, Union
from dataclasses import dataclass, field
from enum import Enum


class LogLevel(Enum):
    """Log levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


@dataclass
class LogContext:
    """Context information for structured logging."""

    correlation_id: str
    operation: Optional[str] = None
    component: Optional[str] = None
    session_key: Optional[str] = None
    profile: Optional[str] = None
    language_hint: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert log context to dictionary."""
        return {
            "correlation_id": self.correlation_id,
            "operation": self.operation,
            "component": self.component,
            "session_key": self.session_key,
            "profile": self.profile,
            "language_hint": self.language_hint,
            "metadata": self.metadata
        }


@dataclass
class LogEntry:
    """Structured log entry."""

    timestamp: datetime
    level: LogLevel
    message: str
    context: LogContext
    logger_name: str = "synthetic_codebase"
    thread_id: Optional[str] = None
    process_id: Optional[str] = None
    exception: Optional[str] = None
    stack_trace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
            "logger": self.logger_name,
            "thread_id": self.thread_id,
            "process_id": self.process_id,
            "exception": self.exception,
            "stack_trace": self.stack_trace,
            **self.context.to_dict()
        }


@dataclass
class Metric:
    """Represents a metric measurement."""

    name: str
    value: Union[int, float]
    timestamp: datetime
    tags: Dict[str, str] = field(default_factory=dict)
    metric_type: str = "gauge"  # "gauge", "counter", "timer"
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert metric to dictionary."""
        return {
            "name": self.name,
            "value": self.value,
            "timestamp": self.timestamp.isoformat(),
            "tags": self.tags,
            "type": self.metric_type,
            "unit": self.unit
        }


@dataclass
class HealthStatus:
    """Health status information."""

    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: datetime
    components: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    overall_health: bool = True

    def add_component(
        self,
        name: str,
        healthy: bool,
        message: str = "",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add a component health status."""
        self.components[name] = {
            "healthy": healthy,
            "message": message,
            "details": details or {},
            "timestamp": datetime.utcnow().isoformat()
        }

        if not healthy:
            self.overall_health = False
            if self.status == "healthy":
                self.status = "degraded"

    def to_dict(self) -> Dict[str, Any]:
        """Convert health status to dictionary."""
        return {
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
            "overall_health": self.overall_health,
            "components": self.components
        }


@dataclass
class SystemMetrics:
    """Process and pipeline metrics."""

    timestamp: datetime
    memory_usage_mb: float
    cpu_usage_percent: float
    transformations: int = 0
    failed_transformations: int = 0
    rejected_inputs: int = 0
    skipped_rules: int = 0
    replacements: int = 0
    avg_transform_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert system metrics to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "memory_usage_mb": self.memory_usage_mb,
            "cpu_usage_percent": self.cpu_usage_percent,
            "transformations": self.transformations,
            "failed_transformations": self.failed_transformations,
            "rejected_inputs": self.rejected_inputs,
            "skipped_rules": self.skipped_rules,
            "replacements": self.replacements,
            "avg_transform_time_ms": self.avg_transform_time_ms
        }


def generate_correlation_id() -> str:
    """Generate a unique correlation ID."""
    return str(uuid.uuid4())


def create_log_context(
    correlation_id: Optional[str] = None,
    operation: Optional[str] = None,
    component: Optional[str] = None,
    **kwargs
) -> LogContext:
    """Create a log context with optional parameters."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    return LogContext(
        correlation_id=correlation_id,
        operation=operation,
        component=component,
        **kwargs
    )
