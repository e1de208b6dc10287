"""
Prometheus Metrics for MTN MoMo SDK

Provides counters and histograms for request monitoring.
Host application should expose the prometheus_client registry.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger("mtn_momo.metrics")

# Outbound calls by endpoint and HTTP status (0 for transport failures)
REQUEST_COUNT = Counter(
    "mtn_momo_requests_total",
    "Total number of MTN MoMo API requests",
    ["endpoint", "code"],
)

REQUEST_LATENCY = Histogram(
    "mtn_momo_request_latency_seconds",
    "MTN MoMo API request latency in seconds",
    ["endpoint"],
)


def metrics_request(endpoint: str, code: int, latency: float) -> None:
    """
    Record metrics for one outbound call.

    Args:
        endpoint: Operation name (e.g. 'transfer', 'token')
        code: HTTP status code, or 0 when no response arrived
        latency: Request duration in seconds
    """
    try:
        REQUEST_COUNT.labels(endpoint=endpoint, code=str(code)).inc()
        REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)
    except Exception as e:
        # Metrics failures should not crash the SDK
        logger.debug("Failed to record metrics: %s", e)
