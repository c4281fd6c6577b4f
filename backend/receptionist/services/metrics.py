"""Prometheus metrics instrumentation for the booking pipeline.

Exposes metrics for monitoring stage latency, booking outcomes and the
health of best-effort side paths. Metrics are exposed via HTTP on the
port given by METRICS_PORT when it is set.

Metrics exported:
- pipeline_stage_latency_seconds: Histogram of time spent per pipeline stage
- booking_outcomes_total: Counter of terminal booking states
- language_cache_lookups_total: Counter of language cache hits and misses
- analytics_writes_total: Counter of analytics writes by status
- sentiment_scores_total: Counter of sentiment scoring calls by status

Usage:
    from receptionist.services.metrics import start_metrics_server, booking_outcomes

    start_metrics_server(port=8001)
    booking_outcomes.labels(outcome='booked').inc()
"""

from prometheus_client import Histogram, Counter, start_http_server
import logging

logger = logging.getLogger(__name__)

# Latency tracking per stage
pipeline_stage_latency = Histogram(
    'pipeline_stage_latency_seconds',
    'Time spent in each booking pipeline stage',
    labelnames=['stage']  # stage: language, booking, synthesis
)

# Terminal states of the booking state machine
booking_outcomes = Counter(
    'booking_outcomes_total',
    'Booking pipeline terminal outcomes',
    labelnames=['outcome']  # outcome: booked, not_parsed, customer_missing, booking_failed, error
)

language_cache_lookups = Counter(
    'language_cache_lookups_total',
    'Language cache lookups',
    labelnames=['result']  # result: hit, miss
)

analytics_writes = Counter(
    'analytics_writes_total',
    'Analytics record writes',
    labelnames=['status']  # status: success, error
)

sentiment_scores = Counter(
    'sentiment_scores_total',
    'Sentiment scoring calls',
    labelnames=['status']  # status: success, error
)


def start_metrics_server(port: int = 8001):
    """Start Prometheus metrics HTTP server."""
    try:
        start_http_server(port)
        logger.info(f"✅ Metrics server started on port {port}")
    except Exception as e:
        logger.error(f"❌ Failed to start metrics server: {e}")
