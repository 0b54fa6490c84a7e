"""Tests for structured logging and skim metrics."""

from structlog.testing import capture_logs

from dataskim.core.logging import (
    SkimMetrics,
    configure_logging,
    end_skim_metrics,
    get_logger,
    get_skim_metrics,
    increment_statistics,
    log_context,
    record_columns_processed,
    record_operation_timing,
    start_skim_metrics,
)


class TestSkimMetrics:
    """Tests for SkimMetrics counters."""

    def test_counters(self):
        metrics = start_skim_metrics("orders")
        increment_statistics(computed=5, failed=1)
        increment_statistics(computed=2)
        record_columns_processed(3)
        record_operation_timing("numeric", 0.5)
        record_operation_timing("numeric", 0.25)

        assert get_skim_metrics() is metrics
        ended = end_skim_metrics()
        assert ended is metrics
        assert get_skim_metrics() is None

        data = metrics.to_dict()
        assert data["data_name"] == "orders"
        assert data["statistics_computed"] == 7
        assert data["statistics_failed"] == 1
        assert data["columns_processed"] == 3
        assert data["timings"] == {"numeric": 0.75}
        assert data["duration_seconds"] >= 0

    def test_no_active_metrics(self):
        """Counters are no-ops outside a skim."""
        end_skim_metrics()
        increment_statistics(computed=1)
        assert get_skim_metrics() is None

    def test_duration_while_running(self):
        metrics = SkimMetrics(data_name="x")
        assert metrics.end_time is None
        assert metrics.duration_seconds >= 0


class TestLogContext:
    """Tests for scoped logging context."""

    def test_nested_context(self):
        from dataskim.core.logging import _run_context

        with log_context(data="orders"):
            with log_context(group=("EU",)):
                assert _run_context.get() == {"data": "orders", "group": ("EU",)}
            assert _run_context.get() == {"data": "orders"}
        assert _run_context.get() is None

    def test_events_below_level_filtered(self):
        """The default WARNING level drops info events."""
        configure_logging()
        logger = get_logger("test")
        with capture_logs() as logs:
            logger.info("quiet")
            logger.warning("loud")

        assert [log["event"] for log in logs] == ["loud"]

    def test_debug_level(self, debug_logging):
        logger = get_logger("test")
        with capture_logs() as logs:
            logger.debug("detail", n=1)

        assert logs == [{"event": "detail", "n": 1, "log_level": "debug"}]
