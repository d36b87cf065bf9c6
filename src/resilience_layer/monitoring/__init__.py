"""Monitoring and metrics instrumentation for the resilience layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from resilience_layer.monitoring.metrics import (
    model_fallback_total,
    model_probe_total,
    record,
    retry_attempts_total,
)

__all__ = [
    "retry_attempts_total",
    "model_fallback_total",
    "model_probe_total",
    "record",
]
