"""
Tests for the dispatch monitor.
"""

import json
import logging

from homeintent.core.errors import FailureKind
from homeintent.monitoring import DispatchMonitor, configure_logging
from homeintent.services.dispatch_result import DispatchOutcome


class TestDispatchMonitor:
    """Tests for stats aggregation and structured logs."""

    def test_empty_stats(self):
        stats = DispatchMonitor().get_stats()

        assert stats.total_requests == 0
        assert stats.success_rate == 0.0
        assert stats.to_dict()["avg_processing_time_ms"] == 0.0

    def test_outcomes_counted(self):
        monitor = DispatchMonitor()

        monitor.track_outcome("a", DispatchOutcome.applied("Light on in kitchen"), processing_time_ms=10)
        monitor.track_outcome("b", DispatchOutcome.denied("not owner"), processing_time_ms=20)
        monitor.track_outcome("c", DispatchOutcome.failed(FailureKind.AUTH_FAILURE, "timeout"))

        stats = monitor.get_stats()
        assert (stats.applied, stats.denied, stats.failed) == (1, 1, 1)
        assert stats.failures_by_kind == {"auth_failure": 1}
        assert stats.avg_processing_time_ms == 10.0
        assert stats.to_dict()["success_rate"] == "66.7%"

    def test_snapshot_is_a_copy(self):
        monitor = DispatchMonitor()
        snapshot = monitor.get_stats()

        monitor.track_write("a", "light1/turn", "1", success=True)

        assert snapshot.device_writes == 0
        assert monitor.get_stats().device_writes == 1

    def test_reset(self):
        monitor = DispatchMonitor()
        monitor.track_extraction("a", "turn on the light", latency_ms=5)

        monitor.reset()

        assert monitor.get_stats().extractions == 0

    def test_outcome_logged_as_json(self, caplog):
        monitor = DispatchMonitor()

        with caplog.at_level(logging.INFO, logger="homeintent"):
            monitor.track_outcome("abcd1234", DispatchOutcome.applied("Door open", ("door/turn",)))

        record = next(r for r in caplog.records if "Dispatch Outcome" in r.getMessage())
        payload = json.loads(record.getMessage().split(": ", 1)[1])
        assert payload["request_id"] == "abcd1234"
        assert payload["outcome"] == "applied"
        assert payload["addresses"] == ["door/turn"]

    def test_long_instruction_truncated_in_log(self, caplog):
        monitor = DispatchMonitor()

        with caplog.at_level(logging.INFO, logger="homeintent"):
            monitor.track_extraction("a", "x" * 80)

        record = next(r for r in caplog.records if "Intent Extracted" in r.getMessage())
        assert "x" * 51 not in record.getMessage()


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level(self):
        configure_logging("DEBUG")
        assert logging.getLogger("homeintent").level == logging.DEBUG

        configure_logging("INFO")
        assert logging.getLogger("homeintent").level == logging.INFO

    def test_unknown_level_kept(self):
        configure_logging("INFO")

        configure_logging("CHATTY")

        assert logging.getLogger("homeintent").level == logging.INFO
