"""
ObservabilityManager for structured logging, metrics, and health checks.
"""

import json
import logging
import os
import threading
import time
import traceback
from collections import defaultdict, deque
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import psutil

from ..models.config import ObservabilityConfig
from ..models.observability import (
    LogLevel, LogContext, LogEntry, Metric, HealthStatus, SystemMetrics,
    create_log_context
)


HealthCheck = Callable[[], Tuple[bool, str, Dict[str, Any]]]

_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
    LogLevel.FATAL: 4
}


class StructuredLogger:
    """Structured logger with JSON output and context propagation."""

    def __init__(
        self,
        name: str = "synthetic_codebase",
        level: LogLevel = LogLevel.INFO,
        log_format: str = "json",
        log_file: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Log level
            log_format: Log format ("json" or "text")
            log_file: Optional log file path
        """
        self.name = name
        self.level = level
        self.log_format = log_format
        self.log_file = log_file

        # Thread-local storage for context
        self._local = threading.local()

        self._logger = logging.getLogger(name)
        self._logger.setLevel(getattr(logging, level.value))
        self._logger.handlers.clear()
        self._setup_handlers()

        self._log_entries: deque = deque(maxlen=1000)
        self._lock = threading.Lock()

    def _setup_handlers(self) -> None:
        """Setup log handlers."""
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, self.level.value))

        if self.log_file:
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(getattr(logging, self.level.value))
            self._logger.addHandler(file_handler)

        self._logger.addHandler(console_handler)

        if self.log_format == "json":
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        for handler in self._logger.handlers:
            handler.setFormatter(formatter)

    def set_context(self, context: LogContext) -> None:
        """Set logging context for current thread."""
        self._local.context = context

    def get_context(self) -> Optional[LogContext]:
        """Get logging context for current thread."""
        return getattr(self._local, 'context', None)

    def clear_context(self) -> None:
        """Clear logging context for current thread."""
        if hasattr(self._local, 'context'):
            delattr(self._local, 'context')

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        exception: Optional[Exception] = None,
        **kwargs
    ) -> None:
        """
        Log a structured message.

        Args:
            level: Log level
            message: Log message
            context: Optional log context (uses thread-local if not provided)
            exception: Optional exception to log
            **kwargs: Additional context data for this entry
        """
        if _LEVEL_ORDER[level] < _LEVEL_ORDER[self.level]:
            return

        if context is None:
            context = self.get_context()
        if context is None:
            context = create_log_context()

        if kwargs:
            # Entry-scoped metadata must not leak into later entries sharing the context
            context = LogContext(
                correlation_id=context.correlation_id,
                operation=context.operation,
                component=context.component,
                session_key=context.session_key,
                profile=context.profile,
                language_hint=context.language_hint,
                metadata={**context.metadata, **kwargs}
            )

        log_entry = LogEntry(
            timestamp=datetime.utcnow(),
            level=level,
            message=message,
            context=context,
            logger_name=self.name,
            thread_id=str(threading.get_ident()),
            process_id=str(os.getpid()),
            exception=str(exception) if exception else None,
            stack_trace=self._get_stack_trace(exception) if exception else None
        )

        with self._lock:
            self._log_entries.append(log_entry)

        python_level = getattr(logging, level.value)
        if self.log_format == "json":
            self._logger.log(python_level, json.dumps(log_entry.to_dict(), default=str))
        else:
            self._logger.log(python_level, self._format_text_message(log_entry))

    def _get_stack_trace(self, exception: Exception) -> str:
        return ''.join(traceback.format_exception(
            type(exception), exception, exception.__traceback__
        ))

    def _format_text_message(self, log_entry: LogEntry) -> str:
        """Format log entry for text output."""
        parts = [log_entry.message]
        context = log_entry.context

        if context.correlation_id:
            parts.append(f"correlation_id={context.correlation_id}")
        if context.operation:
            parts.append(f"operation={context.operation}")
        if context.profile:
            parts.append(f"profile={context.profile}")

        for key, value in context.metadata.items():
            parts.append(f"{key}={value}")

        return " | ".join(parts)

    def debug(self, message: str, **kwargs) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warn(self, message: str, **kwargs) -> None:
        self.log(LogLevel.WARN, message, **kwargs)

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        self.log(LogLevel.ERROR, message, exception=exception, **kwargs)

    def fatal(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        self.log(LogLevel.FATAL, message, exception=exception, **kwargs)

    def get_recent_logs(self, limit: int = 100) -> List[LogEntry]:
        """Get recent log entries."""
        with self._lock:
            return list(self._log_entries)[-limit:]


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        message = record.getMessage()

        # Entries from StructuredLogger are already serialized
        if message.startswith('{'):
            return message

        return json.dumps({
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "message": message,
            "logger": record.name,
            "thread_id": str(threading.get_ident()),
            "process_id": str(os.getpid())
        })


class MetricsCollector:
    """Collects transformation metrics and process resource usage."""

    def __init__(self, retention_hours: int = 24):
        """
        Initialize metrics collector.

        Args:
            retention_hours: How long to retain metrics
        """
        self.retention_hours = retention_hours
        self._metrics: Dict[str, deque] = defaultdict(deque)
        self._lock = threading.Lock()

        self._transformations = 0
        self._failed_transformations = 0
        self._rejected_inputs = 0
        self._skipped_rules = 0
        self._replacements = 0
        self._transform_times: deque = deque(maxlen=1000)

    def record_metric(
        self,
        name: str,
        value: Union[int, float],
        tags: Optional[Dict[str, str]] = None,
        metric_type: str = "gauge",
        unit: Optional[str] = None
    ) -> None:
        """
        Record a metric measurement.

        Args:
            name: Metric name
            value: Metric value
            tags: Optional tags for the metric
            metric_type: Type of metric (gauge, counter, timer)
            unit: Optional unit of measurement
        """
        metric = Metric(
            name=name,
            value=value,
            timestamp=datetime.utcnow(),
            tags=tags or {},
            metric_type=metric_type,
            unit=unit
        )

        with self._lock:
            self._metrics[name].append(metric)
            self._cleanup_old_metrics()

    def increment_counter(self, name: str, tags: Optional[Dict[str, str]] = None) -> None:
        self.record_metric(name, 1, tags, "counter")

    def record_timer(self, name: str, duration_ms: float, tags: Optional[Dict[str, str]] = None) -> None:
        self.record_metric(name, duration_ms, tags, "timer", "ms")

    def record_gauge(self, name: str, value: Union[int, float], tags: Optional[Dict[str, str]] = None) -> None:
        self.record_metric(name, value, tags, "gauge")

    def record_transformation(
        self,
        duration_ms: float,
        replacements: int = 0,
        skipped_rules: int = 0,
        failed: bool = False,
        profile: Optional[str] = None
    ) -> None:
        """Record one completed transformation."""
        with self._lock:
            self._transformations += 1
            if failed:
                self._failed_transformations += 1
            self._replacements += replacements
            self._skipped_rules += skipped_rules
            self._transform_times.append(duration_ms)

        tags = {"profile": profile} if profile else None
        self.increment_counter("transformations", tags)
        if failed:
            self.increment_counter("transformations_failed", tags)
        if skipped_rules:
            self.record_metric("rules_skipped", skipped_rules, tags, "counter")

    def record_rejected_input(self) -> None:
        """Record an input rejected before rewriting."""
        with self._lock:
            self._rejected_inputs += 1
        self.increment_counter("inputs_rejected")

    @contextmanager
    def time_operation(self, operation_name: str, tags: Optional[Dict[str, str]] = None):
        """Record the duration of the wrapped block as a timer."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.record_timer(f"{operation_name}.duration", duration_ms, tags)

    def get_metrics(self, name: Optional[str] = None, hours: int = 1) -> List[Metric]:
        """
        Get metrics for a specific name or all metrics.

        Args:
            name: Optional metric name filter
            hours: Hours to look back

        Returns:
            List of metrics ordered by time
        """
        cutoff = datetime.utcnow() - timedelta(hours=hours)

        with self._lock:
            if name:
                metrics = [m for m in self._metrics.get(name, []) if m.timestamp > cutoff]
            else:
                metrics = [
                    m for metric_list in self._metrics.values()
                    for m in metric_list if m.timestamp > cutoff
                ]

        return sorted(metrics, key=lambda m: m.timestamp)

    def get_system_metrics(self) -> SystemMetrics:
        """Get current process and pipeline metrics."""
        memory_info = psutil.Process().memory_info()
        cpu_percent = psutil.cpu_percent()

        with self._lock:
            avg_transform_time = (
                sum(self._transform_times) / len(self._transform_times)
                if self._transform_times else 0.0
            )

            return SystemMetrics(
                timestamp=datetime.utcnow(),
                memory_usage_mb=memory_info.rss / (1024 * 1024),
                cpu_usage_percent=cpu_percent,
                transformations=self._transformations,
                failed_transformations=self._failed_transformations,
                rejected_inputs=self._rejected_inputs,
                skipped_rules=self._skipped_rules,
                replacements=self._replacements,
                avg_transform_time_ms=avg_transform_time
            )

    def _cleanup_old_metrics(self) -> None:
        """Drop metrics older than the retention period."""
        cutoff = datetime.utcnow() - timedelta(hours=self.retention_hours)

        for metric_list in self._metrics.values():
            while metric_list and metric_list[0].timestamp < cutoff:
                metric_list.popleft()


class ObservabilityManager:
    """
    Main observability manager that coordinates logging, metrics, and health checks.
    """

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        """
        Initialize observability manager.

        Args:
            config: Observability configuration
        """
        self.config = config or ObservabilityConfig()

        self.logger = StructuredLogger(
            name="synthetic_codebase",
            level=LogLevel(self.config.log_level.upper()),
            log_format=self.config.log_format,
            log_file=self.config.log_file
        )

        self.metrics = MetricsCollector()

        self._health_checks: Dict[str, HealthCheck] = {}

    def log_event(
        self,
        level: str,
        message: str,
        context: Optional[LogContext] = None,
        **kwargs
    ) -> None:
        """
        Log a structured event.

        Args:
            level: Log level (DEBUG, INFO, WARN, ERROR, FATAL)
            message: Log message
            context: Optional log context
            **kwargs: Additional context data
        """
        self.logger.log(LogLevel(level.upper()), message, context, **kwargs)

    def record_metric(
        self,
        name: str,
        value: Union[int, float],
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric measurement when metrics are enabled."""
        if self.config.metrics_enabled:
            self.metrics.record_metric(name, value, tags)

    def record_transformation(
        self,
        duration_ms: float,
        replacements: int = 0,
        skipped_rules: int = 0,
        failed: bool = False,
        profile: Optional[str] = None
    ) -> None:
        if self.config.metrics_enabled:
            self.metrics.record_transformation(
                duration_ms, replacements, skipped_rules, failed, profile
            )

    def record_rejected_input(self) -> None:
        if self.config.metrics_enabled:
            self.metrics.record_rejected_input()

    @contextmanager
    def time_operation(self, operation_name: str, tags: Optional[Dict[str, str]] = None):
        """Context manager timing an operation into the metrics collector."""
        if not self.config.metrics_enabled:
            yield
            return

        with self.metrics.time_operation(operation_name, tags):
            yield

    def set_log_context(self, context: LogContext) -> None:
        """Set logging context for current thread."""
        self.logger.set_context(context)

    def clear_log_context(self) -> None:
        """Clear logging context for current thread."""
        self.logger.clear_context()

    def register_health_check(self, name: str, check_func: HealthCheck) -> None:
        """
        Register a health check function.

        Args:
            name: Name of the health check
            check_func: Function that returns (healthy: bool, message: str, details: dict)
        """
        self._health_checks[name] = check_func

    def health_check(self) -> HealthStatus:
        """
        Run registered checks and resource checks.

        Returns:
            Health status information
        """
        health_status = HealthStatus(status="healthy", timestamp=datetime.utcnow())

        for name, check_func in self._health_checks.items():
            try:
                healthy, message, details = check_func()
                health_status.add_component(name, healthy, message, details)
            except Exception as e:
                health_status.add_component(name, False, f"Health check failed: {str(e)}")

        if not self.config.health_check_enabled:
            return health_status

        try:
            system_metrics = self.metrics.get_system_metrics()

            memory_healthy = system_metrics.memory_usage_mb < self.config.memory_threshold_mb
            health_status.add_component(
                "memory",
                memory_healthy,
                f"Memory usage: {system_metrics.memory_usage_mb:.1f}MB",
                {"usage_mb": system_metrics.memory_usage_mb,
                 "threshold_mb": self.config.memory_threshold_mb}
            )

            cpu_healthy = system_metrics.cpu_usage_percent < self.config.cpu_threshold_percent
            health_status.add_component(
                "cpu",
                cpu_healthy,
                f"CPU usage: {system_metrics.cpu_usage_percent:.1f}%",
                {"usage_percent": system_metrics.cpu_usage_percent,
                 "threshold_percent": self.config.cpu_threshold_percent}
            )
        except psutil.Error as e:
            health_status.add_component(
                "system_metrics", False, f"Failed to get system metrics: {str(e)}"
            )

        return health_status

    def get_system_metrics(self) -> SystemMetrics:
        return self.metrics.get_system_metrics()

    def get_recent_logs(self, limit: int = 100) -> List[LogEntry]:
        return self.logger.get_recent_logs(limit)

    def get_metrics(self, name: Optional[str] = None, hours: int = 1) -> List[Metric]:
        return self.metrics.get_metrics(name, hours)

    def shutdown(self) -> None:
        """Log final health and clear the thread context."""
        self.log_event("INFO", "Shutting down observability manager")
        self.clear_log_context()

        final_health = self.health_check()
        self.log_event("INFO", f"Final health status: {final_health.status}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
