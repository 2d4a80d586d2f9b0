"""Unit tests for structured logging helpers."""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from projection_engine.cache import ResultCache
from projection_engine.calculations.growth import GrowthModel
from projection_engine.calculations.profitability import calculate_irr, calculate_payback_period
from projection_engine.logging import configure_logging, get_logger, log_sentinel_outcome


class TestSentinelLogging:
    """Test suite for sentinel outcome records."""

    def test_log_sentinel_outcome(self) -> None:
        with capture_logs() as logs:
            logger = structlog.get_logger("test")
            log_sentinel_outcome(
                logger,
                operation="irr",
                sentinel=100.0,
                reason="NPV positive at upper bound",
                context={"upper_npv": 1234.5},
            )

        assert len(logs) == 1
        record = logs[0]
        assert record["event"] == "Calculation resolved to sentinel"
        assert record["log_level"] == "warning"
        assert record["operation"] == "irr"
        assert record["sentinel"] == 100.0
        assert record["context"] == {"upper_npv": 1234.5}

    def test_log_sentinel_outcome_without_context(self) -> None:
        with capture_logs() as logs:
            log_sentinel_outcome(structlog.get_logger("test"), "payback_period", -1, "never recovered")

        assert "context" not in logs[0]

    def test_get_logger_binds(self) -> None:
        with capture_logs() as logs:
            get_logger("projection_engine.test").bind(plan_id="plan-1").info("hello")

        assert logs[0]["plan_id"] == "plan-1"


@pytest.fixture
def restore_logging():
    """Put structlog and the root logger back after a configure_logging() call."""
    root = logging.getLogger()
    previous_level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(previous_level)


class TestConfigureLogging:
    """Test suite for host-side logging configuration."""

    def test_error_level_silences_calculations(self, restore_logging, capsys, caplog) -> None:
        """Loggers created at import time honour a later configuration."""
        configure_logging(level="ERROR")

        model = GrowthModel(cache=ResultCache())
        model.project_revenue(100000, 10, "annual", "medium", "linear")
        assert calculate_irr(10000, [20000, 30000, 40000]) == 100
        assert calculate_payback_period(20000, [4000] * 3) == -1

        assert capsys.readouterr().out == ""
        assert not [r for r in caplog.records if r.name.startswith("projection_engine")]

    def test_warning_level_keeps_sentinels(self, restore_logging, caplog) -> None:
        configure_logging(level="WARNING", format_json=True)

        with caplog.at_level(logging.WARNING):
            calculate_irr(10000, [20000, 30000, 40000])

        messages = [r.getMessage() for r in caplog.records
                    if r.name == "projection_engine.calculations.profitability"]
        assert len(messages) == 1
        assert '"subsystem": "calculations"' in messages[0]
        assert '"sentinel": 100.0' in messages[0]
