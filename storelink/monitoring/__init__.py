"""
Monitoring
Logging and in-process metrics
"""

from .logger import get_logger, setup_logging
from .metrics import MetricsCollector

# Global instance
global_metrics = MetricsCollector()

__all__ = [
    "setup_logging",
    "get_logger",
    "MetricsCollector",
    "global_metrics",
]
