"""
In-process metrics
Counters and latency histograms for the API and marketplace calls
"""

import statistics
from collections import deque
from datetime import datetime
from typing import Any, Dict


class Metric:
    """A single metric"""

    def __init__(self, name: str, metric_type: str = "gauge", window_size: int = 100):
        self.name = name
        self.metric_type = metric_type  # gauge, counter, histogram
        self.values = deque(maxlen=window_size)
        self._counter = 0.0
        self.created_at = datetime.now()

    def record(self, value: float):
        if self.metric_type == "counter":
            self._counter += value
            self.values.append(self._counter)
        else:
            self.values.append(value)

    def increment(self, amount: float = 1):
        if self.metric_type == "counter":
            self.record(amount)

    def get_value(self) -> float:
        if self.metric_type == "counter":
            return self._counter
        return self.values[-1] if self.values else 0

    def get_stats(self) -> Dict[str, float]:
        if not self.values:
            return {"count": 0, "mean": 0, "min": 0, "max": 0, "p50": 0, "p95": 0}

        values = list(self.values)
        ordered = sorted(values)
        count = len(values)

        return {
            "count": count,
            "mean": statistics.mean(values),
            "min": ordered[0],
            "max": ordered[-1],
            "p50": ordered[int(count * 0.5)],
            "p95": ordered[int(count * 0.95)] if count > 20 else ordered[-1],
        }


class MetricsCollector:
    """Metric registry"""

    def __init__(self):
        self.metrics: Dict[str, Metric] = {}
        self._register_defaults()

    def _register_defaults(self):
        self.register("api.requests", "counter")
        self.register("api.errors", "counter")
        self.register("api.validation_errors", "counter")
        self.register("api.latency", "histogram")

        self.register("ricardo.requests", "counter")
        self.register("ricardo.errors", "counter")
        self.register("ricardo.authentications", "counter")
        self.register("ricardo.latency", "histogram")
        self.register("ricardo.articles_published", "counter")
        self.register("ricardo.stock_updates", "counter")

    def register(self, name: str, metric_type: str = "gauge", window_size: int = 100) -> Metric:
        if name not in self.metrics:
            self.metrics[name] = Metric(name, metric_type, window_size)
        return self.metrics[name]

    def record(self, name: str, value: float):
        if name not in self.metrics:
            self.register(name, "histogram")
        self.metrics[name].record(value)

    def increment(self, name: str, amount: float = 1):
        if name not in self.metrics:
            self.register(name, "counter")
        self.metrics[name].increment(amount)

    def value(self, name: str) -> float:
        metric = self.metrics.get(name)
        return metric.get_value() if metric else 0

    def get_summary(self) -> Dict[str, Any]:
        """Summary for the health endpoint"""
        requests = self.value("api.requests")
        errors = self.value("api.errors")
        latency = self.metrics.get("api.latency")

        return {
            "timestamp": datetime.now().isoformat(),
            "api": {
                "total_requests": requests,
                "total_errors": errors,
                "error_rate": errors / max(requests, 1),
                "latency": latency.get_stats() if latency else {},
            },
            "ricardo": {
                "requests": self.value("ricardo.requests"),
                "errors": self.value("ricardo.errors"),
                "authentications": self.value("ricardo.authentications"),
                "articles_published": self.value("ricardo.articles_published"),
                "stock_updates": self.value("ricardo.stock_updates"),
            },
        }

    def reset(self):
        self.metrics.clear()
        self._register_defaults()
