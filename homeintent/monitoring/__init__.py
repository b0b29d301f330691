"""
Monitoring Module - logging and metrics for the dispatcher.

Usage:
======
    from homeintent.monitoring import dispatch_monitor

    dispatch_monitor.track_outcome(request_id, outcome, processing_time_ms)
    stats = dispatch_monitor.get_stats()
"""

from homeintent.monitoring.monitor import (
    DispatchMonitor,
    DispatchStats,
    configure_logging,
    dispatch_monitor,
)

__all__ = [
    "DispatchMonitor",
    "DispatchStats",
    "configure_logging",
    "dispatch_monitor",
]
