"""Custom Prometheus metrics for the resilience layer.

Alert rules worth configuring:
- retry_attempts_total{outcome="exhausted"} (sustained upstream failures)
- model_fallback_total{accepted="true"} (users pushed off the pro model)
- model_probe_total{outcome="rate_limited"} (quota pressure at session start)
"""

from prometheus_client import Counter

from resilience_layer.config import settings

# === Retry Metrics ===

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Executor attempt outcomes",
    ["outcome"],
)
"""
Executor outcomes per attempt.

Labels:
- outcome: success, retry (retryable failure, another attempt follows),
  non_retryable (classifier rejected), exhausted (attempt budget used up)
"""

# === Fallback Metrics ===

model_fallback_total = Counter(
    "model_fallback_total",
    "Fallback handler invocations after persistent rate limiting",
    ["accepted"],
)
"""
Labels:
- accepted: true (fallback model applied), false (declined or handler failed)
"""

# === Probe Metrics ===

model_probe_total = Counter(
    "model_probe_total",
    "Effective-model probe outcomes",
    ["outcome"],
)
"""
Labels:
- outcome: skipped (non-default model), ok, rate_limited, error
"""


def record(counter: Counter, **labels: str) -> None:
    """Increment a labelled counter when metrics are enabled."""
    if settings.PROMETHEUS_ENABLED:
        counter.labels(**labels).inc()
