"""
Unit tests for ObservabilityManager and related components.
"""

import json
import logging
import threading
from datetime import datetime, timedelta
from unittest.mock import patch, MagicMock

import psutil

from synthetic_codebase.services.observability import (
    ObservabilityManager,
    StructuredLogger,
    MetricsCollector,
    JsonFormatter
)
from synthetic_codebase.models.config import ObservabilityConfig
from synthetic_codebase.models.observability import (
    LogLevel, LogContext, LogEntry, Metric, HealthStatus, create_log_context
)


def _mock_process(rss_mb: float) -> MagicMock:
    process = MagicMock()
    process.memory_info.return_value = MagicMock(rss=int(rss_mb * 1024 * 1024))
    return process


class TestLogContext:
    """Test cases for LogContext."""

    def test_to_dict(self):
        context = LogContext(
            correlation_id="test-123",
            operation="transform",
            profile="paranoid",
            metadata={"key": "value"}
        )

        result = context.to_dict()

        assert result["correlation_id"] == "test-123"
        assert result["operation"] == "transform"
        assert result["profile"] == "paranoid"
        assert result["session_key"] is None
        assert result["metadata"] == {"key": "value"}

    def test_create_log_context(self):
        context = create_log_context(operation="transform", component="Rewriter")

        assert context.correlation_id
        assert context.operation == "transform"
        assert context.component == "Rewriter"

    def test_create_log_context_keeps_correlation_id(self):
        context = create_log_context(correlation_id="abc", session_key="s1")

        assert context.correlation_id == "abc"
        assert context.session_key == "s1"


class TestLogEntry:
    """Test cases for LogEntry."""

    def test_to_dict_flattens_context(self):
        entry = LogEntry(
            timestamp=datetime(2024, 1, 1, 12, 0, 0),
            level=LogLevel.WARN,
            message="Skipped rule",
            context=LogContext(correlation_id="c-1", operation="transform")
        )

        result = entry.to_dict()

        assert result["timestamp"] == "2024-01-01T12:00:00"
        assert result["level"] == "WARN"
        assert result["message"] == "Skipped rule"
        assert result["correlation_id"] == "c-1"
        assert result["operation"] == "transform"


class TestStructuredLogger:
    """Test cases for StructuredLogger."""

    def setup_method(self):
        self.logger = StructuredLogger(name="test_structured_logger", level=LogLevel.DEBUG)

    def test_set_and_get_context(self):
        context = create_log_context(operation="transform")

        self.logger.set_context(context)

        assert self.logger.get_context() is context

    def test_clear_context(self):
        self.logger.set_context(create_log_context())
        self.logger.clear_context()

        assert self.logger.get_context() is None

    def test_context_is_thread_local(self):
        self.logger.set_context(create_log_context(operation="main"))
        seen = []

        thread = threading.Thread(target=lambda: seen.append(self.logger.get_context()))
        thread.start()
        thread.join()

        assert seen == [None]

    def test_log_uses_thread_context(self):
        context = create_log_context(correlation_id="corr-1", operation="transform")
        self.logger.set_context(context)

        self.logger.info("Starting transformation")

        entry = self.logger.get_recent_logs(1)[0]
        assert entry.message == "Starting transformation"
        assert entry.context.correlation_id == "corr-1"

    def test_kwargs_do_not_leak_into_context(self):
        """Entry metadata is copied, the shared context is untouched."""
        context = create_log_context(correlation_id="corr-1")
        self.logger.set_context(context)

        self.logger.info("first", replacements=3)
        self.logger.info("second")

        first, second = self.logger.get_recent_logs(2)
        assert first.context.metadata == {"replacements": 3}
        assert first.context.correlation_id == "corr-1"
        assert second.context.metadata == {}
        assert context.metadata == {}

    def test_log_levels(self):
        self.logger.debug("d")
        self.logger.info("i")
        self.logger.warn("w")
        self.logger.error("e")
        self.logger.fatal("f")

        levels = [entry.level for entry in self.logger.get_recent_logs(5)]
        assert levels == [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL]

    def test_log_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError as e:
            self.logger.error("Scoring failed", exception=e)

        entry = self.logger.get_recent_logs(1)[0]
        assert entry.exception == "boom"
        assert "ValueError" in entry.stack_trace

    def test_level_filtering(self):
        logger = StructuredLogger(name="test_filtered_logger", level=LogLevel.WARN)

        logger.info("dropped")
        logger.warn("kept")

        messages = [entry.message for entry in logger.get_recent_logs()]
        assert messages == ["kept"]

    def test_json_output(self):
        with patch.object(self.logger._logger, "log") as mock_log:
            self.logger.info("hello", profile_name="balanced")

        level, payload = mock_log.call_args[0]
        data = json.loads(payload)
        assert level == logging.INFO
        assert data["message"] == "hello"
        assert data["metadata"] == {"profile_name": "balanced"}

    def test_text_output(self):
        logger = StructuredLogger(name="test_text_logger", log_format="text")
        logger.set_context(create_log_context(correlation_id="c-9", operation="transform"))

        with patch.object(logger._logger, "log") as mock_log:
            logger.info("done", replacements=2)

        message = mock_log.call_args[0][1]
        assert message == "done | correlation_id=c-9 | operation=transform | replacements=2"


class TestJsonFormatter:
    """Test cases for JsonFormatter."""

    def test_format_json_message(self):
        record = logging.LogRecord("n", logging.INFO, __file__, 1, '{"a": 1}', None, None)

        assert JsonFormatter().format(record) == '{"a": 1}'

    def test_format_regular_message(self):
        record = logging.LogRecord("n", logging.INFO, __file__, 1, "plain", None, None)

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "plain"
        assert data["level"] == "INFO"
        assert data["logger"] == "n"


class TestMetricsCollector:
    """Test cases for MetricsCollector."""

    def setup_method(self):
        self.collector = MetricsCollector()

    def test_record_metric(self):
        self.collector.record_metric("rules.active", 15, {"profile": "balanced"})

        metrics = self.collector.get_metrics("rules.active")
        assert len(metrics) == 1
        assert metrics[0].value == 15
        assert metrics[0].tags == {"profile": "balanced"}
        assert metrics[0].metric_type == "gauge"

    def test_counter_and_timer(self):
        self.collector.increment_counter("calls")
        self.collector.record_timer("transform.duration", 12.5)

        assert self.collector.get_metrics("calls")[0].metric_type == "counter"
        timer = self.collector.get_metrics("transform.duration")[0]
        assert timer.metric_type == "timer"
        assert timer.unit == "ms"

    def test_record_transformation(self):
        self.collector.record_transformation(10.0, replacements=4, profile="paranoid")
        self.collector.record_transformation(20.0, skipped_rules=2, failed=True, profile="paranoid")

        assert len(self.collector.get_metrics("transformations")) == 2
        assert len(self.collector.get_metrics("transformations_failed")) == 1
        assert self.collector.get_metrics("rules_skipped")[0].value == 2
        assert self.collector.get_metrics("transformations")[0].tags == {"profile": "paranoid"}

    def test_record_rejected_input(self):
        self.collector.record_rejected_input()

        assert len(self.collector.get_metrics("inputs_rejected")) == 1

    def test_time_operation(self):
        with self.collector.time_operation("transform"):
            pass

        timers = self.collector.get_metrics("transform.duration")
        assert len(timers) == 1
        assert timers[0].value >= 0

    def test_get_metrics_with_time_filter(self):
        old = Metric("old", 1, datetime.utcnow() - timedelta(hours=2))
        self.collector._metrics["old"].append(old)
        self.collector.record_metric("new", 2)

        names = [metric.name for metric in self.collector.get_metrics(hours=1)]
        assert names == ["new"]

    @patch("psutil.cpu_percent")
    @patch("psutil.Process")
    def test_get_system_metrics(self, mock_process, mock_cpu):
        mock_process.return_value = _mock_process(256)
        mock_cpu.return_value = 12.5

        self.collector.record_transformation(10.0, replacements=3)
        self.collector.record_transformation(30.0, replacements=1, failed=True)
        self.collector.record_rejected_input()

        metrics = self.collector.get_system_metrics()

        assert metrics.memory_usage_mb == 256
        assert metrics.cpu_usage_percent == 12.5
        assert metrics.transformations == 2
        assert metrics.failed_transformations == 1
        assert metrics.rejected_inputs == 1
        assert metrics.replacements == 4
        assert metrics.avg_transform_time_ms == 20.0


class TestObservabilityManager:
    """Test cases for ObservabilityManager."""

    def setup_method(self):
        self.config = ObservabilityConfig(log_level="DEBUG")
        self.manager = ObservabilityManager(self.config)

    def test_log_event(self):
        self.manager.log_event("warn", "Skipped rule in comments", category="comments")

        entry = self.manager.get_recent_logs(1)[0]
        assert entry.level == LogLevel.WARN
        assert entry.context.metadata == {"category": "comments"}

    def test_log_context_management(self):
        context = create_log_context(operation="transform")

        self.manager.set_log_context(context)
        assert self.manager.logger.get_context() is context

        self.manager.clear_log_context()
        assert self.manager.logger.get_context() is None

    def test_record_transformation(self):
        self.manager.record_transformation(5.0, replacements=2, profile="balanced")

        assert len(self.manager.get_metrics("transformations")) == 1

    def test_disabled_metrics(self):
        manager = ObservabilityManager(ObservabilityConfig(metrics_enabled=False))

        manager.record_metric("x", 1)
        manager.record_transformation(5.0)
        manager.record_rejected_input()
        with manager.time_operation("transform"):
            pass

        assert manager.get_metrics() == []

    def test_time_operation(self):
        with self.manager.time_operation("transform"):
            pass

        assert len(self.manager.get_metrics("transform.duration")) == 1

    @patch("psutil.cpu_percent")
    @patch("psutil.Process")
    def test_health_check(self, mock_process, mock_cpu):
        mock_process.return_value = _mock_process(100)
        mock_cpu.return_value = 5.0
        self.manager.register_health_check("rule_catalog", lambda: (True, "ok", {"rules": 3}))

        health = self.manager.health_check()

        assert isinstance(health, HealthStatus)
        assert health.status == "healthy"
        assert health.overall_health is True
        assert set(health.components) == {"rule_catalog", "memory", "cpu"}
        assert health.components["rule_catalog"]["details"] == {"rules": 3}

    @patch("psutil.cpu_percent")
    @patch("psutil.Process")
    def test_health_check_over_threshold(self, mock_process, mock_cpu):
        mock_process.return_value = _mock_process(2048)
        mock_cpu.return_value = 5.0

        health = self.manager.health_check()

        assert health.status == "degraded"
        assert health.components["memory"]["healthy"] is False
        assert health.components["cpu"]["healthy"] is True

    def test_health_check_with_failure(self):
        manager = ObservabilityManager(ObservabilityConfig(health_check_enabled=False))
        manager.register_health_check("result_store", lambda: (False, "unwritable", {}))

        health = manager.health_check()

        assert health.overall_health is False
        assert health.components["result_store"]["message"] == "unwritable"
        assert "memory" not in health.components

    def test_health_check_with_exception(self):
        manager = ObservabilityManager(ObservabilityConfig(health_check_enabled=False))

        def broken():
            raise RuntimeError("store offline")

        manager.register_health_check("result_store", broken)

        health = manager.health_check()

        assert health.components["result_store"]["healthy"] is False
        assert "store offline" in health.components["result_store"]["message"]

    @patch("psutil.Process")
    def test_health_check_psutil_error(self, mock_process):
        mock_process.side_effect = psutil.AccessDenied()

        health = self.manager.health_check()

        assert health.components["system_metrics"]["healthy"] is False

    @patch("psutil.cpu_percent")
    @patch("psutil.Process")
    def test_context_manager(self, mock_process, mock_cpu):
        mock_process.return_value = _mock_process(100)
        mock_cpu.return_value = 5.0

        with ObservabilityManager(ObservabilityConfig()) as manager:
            manager.set_log_context(create_log_context())

        assert manager.logger.get_context() is None
        messages = [entry.message for entry in manager.get_recent_logs()]
        assert "Shutting down observability manager" in messages
