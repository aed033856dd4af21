"""
MyColor Metrics Collection
In-process request counters and recent-latency windows for /metrics.
"""
import time
from collections import Counter, defaultdict, deque
from threading import Lock
from typing import Any, Deque, Dict, Optional, Sequence

# Samples kept per timed operation
TIMING_WINDOW = 1000


def percentile(samples: Sequence[float], pct: float) -> float:
    """Linear-interpolated percentile of an ascending sequence."""
    if not samples:
        return 0.0
    position = (len(samples) - 1) * pct / 100
    lower = int(position)
    upper = min(lower + 1, len(samples) - 1)
    return samples[lower] + (samples[upper] - samples[lower]) * (position - lower)


def summarize_timings(samples: Sequence[float]) -> Dict[str, float]:
    """count/mean/min/max/p50/p95 for one window of durations."""
    ordered = sorted(samples)
    return {
        "count": len(ordered),
        "mean": sum(ordered) / len(ordered),
        "min": ordered[0],
        "max": ordered[-1],
        "p50": percentile(ordered, 50),
        "p95": percentile(ordered, 95),
    }


class MetricsCollector:
    """Lock-protected counters plus a bounded window of durations per operation."""

    def __init__(self, window: int = TIMING_WINDOW):
        self._lock = Lock()
        self._window = window
        self._counters: Counter = Counter()
        self._timings: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=self._window))
        self._start_time = time.time()

    def _incr(self, name: str):
        with self._lock:
            self._counters[name] += 1

    def increment_request_count(self):
        self._incr("analyze_requests_total")

    def increment_success_count(self):
        self._incr("analyze_success_total")

    def increment_failure_count(self, error_type: str):
        """Failure counter keyed by error type (bad_request, config, upstream, internal)."""
        self._incr(f"analyze_failed_total_{error_type}")

    def record_timing(self, operation: str, duration_ms: float):
        """Add a duration; the oldest sample drops out once the window is full."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Statistics over the samples currently in each window."""
        with self._lock:
            snapshot = {name: list(samples) for name, samples in self._timings.items() if samples}
        return {name: summarize_timings(samples) for name, samples in snapshot.items()}

    def get_summary(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": time.time() - self._start_time,
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "timing_window": self._window,
        }

    def reset(self):
        """Clear counters and timings (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._start_time = time.time()


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    if _metrics is not None:
        _metrics.reset()
