"""
Dispatch Monitor - structured logging and metrics for instructions.

One object records everything that happens to an instruction:
- Structured JSON log lines (intent_extracted, device_write, dispatch_outcome)
- In-memory aggregation (outcomes, failure kinds, writes, extraction latency)

Usage:
    from homeintent.monitoring import dispatch_monitor

    dispatch_monitor.track_extraction(request_id, text, intent_dict, latency_ms=120.0)
    dispatch_monitor.track_write(request_id, "light1/turn", "1", success=True)
    dispatch_monitor.track_outcome(request_id, outcome, processing_time_ms=180.0)

    stats = dispatch_monitor.get_stats()
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# LOGGING SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("homeintent")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_logging(level: str) -> None:
    """Apply a level name ("DEBUG", "INFO", ...) to the homeintent logger tree."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        logger.warning(f"Unknown LOG_LEVEL {level!r}, keeping {logging.getLevelName(logger.level)}")
        return
    logger.setLevel(resolved)


# ---------------------------------------------------------------------------
# METRICS DATA CLASSES
# ---------------------------------------------------------------------------
@dataclass
class DispatchStats:
    """Aggregated dispatch metrics since start-up (or the last reset)."""
    total_requests: int = 0
    applied: int = 0
    denied: int = 0
    failed: int = 0
    failures_by_kind: Dict[str, int] = field(default_factory=dict)
    device_writes: int = 0
    failed_device_writes: int = 0
    extractions: int = 0
    total_extraction_latency_ms: float = 0.0
    total_processing_time_ms: float = 0.0

    @property
    def avg_extraction_latency_ms(self) -> float:
        if self.extractions == 0:
            return 0.0
        return self.total_extraction_latency_ms / self.extractions

    @property
    def avg_processing_time_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_processing_time_ms / self.total_requests

    @property
    def success_rate(self) -> float:
        """Share of requests that did not fail, as a percentage."""
        if self.total_requests == 0:
            return 0.0
        return ((self.applied + self.denied) / self.total_requests) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_requests": self.total_requests,
            "applied": self.applied,
            "denied": self.denied,
            "failed": self.failed,
            "success_rate": f"{self.success_rate:.1f}%",
            "failures_by_kind": dict(self.failures_by_kind),
            "device_writes": self.device_writes,
            "failed_device_writes": self.failed_device_writes,
            "avg_extraction_latency_ms": round(self.avg_extraction_latency_ms, 2),
            "avg_processing_time_ms": round(self.avg_processing_time_ms, 2),
        }


# ---------------------------------------------------------------------------
# DISPATCH MONITOR
# ---------------------------------------------------------------------------
class DispatchMonitor:
    """
    Logging + metrics in one call.

    Each track_* method writes a structured JSON log line and updates
    the in-memory aggregate under a lock (requests run concurrently).
    """

    def __init__(self):
        self._logger = logger
        self._lock = Lock()
        self._stats = DispatchStats()

    # -----------------------------------------------------------------------
    # MAIN TRACKING METHODS
    # -----------------------------------------------------------------------

    def track_extraction(
        self,
        request_id: str,
        original_text: str,
        intent: Optional[Dict[str, Any]] = None,
        latency_ms: float = 0.0,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """Track the result of turning raw text into an intent."""
        with self._lock:
            self._stats.extractions += 1
            self._stats.total_extraction_latency_ms += latency_ms

        log_data = {
            "event": "intent_extracted",
            "request_id": request_id,
            "success": success,
            "intent": intent,
            "latency_ms": round(latency_ms, 2),
            "original_text": original_text[:50] + "..." if len(original_text) > 50 else original_text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if error:
            log_data["error"] = error

        level = logging.INFO if success else logging.WARNING
        self._logger.log(level, f"Intent Extracted: {json.dumps(log_data)}")

    def track_write(
        self,
        request_id: str,
        address: str,
        value: Any,
        success: bool,
        error: Optional[str] = None,
    ) -> None:
        """Track one device-state write."""
        with self._lock:
            self._stats.device_writes += 1
            if not success:
                self._stats.failed_device_writes += 1

        log_data = {
            "event": "device_write",
            "request_id": request_id,
            "address": address,
            "value": value,
            "success": success,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if error:
            log_data["error"] = error

        level = logging.INFO if success else logging.WARNING
        self._logger.log(level, f"Device Write: {json.dumps(log_data)}")

    def track_outcome(
        self,
        request_id: str,
        outcome: Any,  # DispatchOutcome - using Any to avoid circular import
        processing_time_ms: float = 0.0,
    ) -> None:
        """Track the terminal outcome of a request."""
        status = outcome.status.value
        kind = outcome.error_kind.value if outcome.error_kind else None

        with self._lock:
            self._stats.total_requests += 1
            self._stats.total_processing_time_ms += processing_time_ms
            if status == "applied":
                self._stats.applied += 1
            elif status == "denied":
                self._stats.denied += 1
            else:
                self._stats.failed += 1
                self._stats.failures_by_kind[kind] = self._stats.failures_by_kind.get(kind, 0) + 1

        log_data = {
            "event": "dispatch_outcome",
            "request_id": request_id,
            "outcome": status,
            "message": outcome.message or None,
            "error_kind": kind,
            "error": outcome.detail,
            "addresses": list(outcome.addresses),
            "processing_time_ms": round(processing_time_ms, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        level = logging.INFO if kind is None else logging.WARNING
        self._logger.log(level, f"Dispatch Outcome: {json.dumps(log_data)}")

    # -----------------------------------------------------------------------
    # METRICS METHODS
    # -----------------------------------------------------------------------

    def get_stats(self) -> DispatchStats:
        """Get a snapshot of the aggregated statistics."""
        with self._lock:
            return DispatchStats(
                total_requests=self._stats.total_requests,
                applied=self._stats.applied,
                denied=self._stats.denied,
                failed=self._stats.failed,
                failures_by_kind=dict(self._stats.failures_by_kind),
                device_writes=self._stats.device_writes,
                failed_device_writes=self._stats.failed_device_writes,
                extractions=self._stats.extractions,
                total_extraction_latency_ms=self._stats.total_extraction_latency_ms,
                total_processing_time_ms=self._stats.total_processing_time_ms,
            )

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._stats = DispatchStats()


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
dispatch_monitor = DispatchMonitor()
