"""Prometheus metrics for notification digest monitoring.

Usage:
    from taskboard_service.features.notifications.metrics import (
        notification_digest_total,
    )

    notification_digest_total.labels(scope="assigned").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

notification_digest_total = Counter(
    "notification_digest_total",
    "Total number of notification digests built",
    labelnames=["scope"],
)

notification_digest_duration_seconds = Histogram(
    "notification_digest_duration_seconds",
    "Time spent building a notification digest",
    labelnames=["scope"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

notification_board_skipped_total = Counter(
    "notification_board_skipped_total",
    "Boards that contributed nothing to a digest, by reason",
    labelnames=["reason"],
)

notification_bucket_total = Counter(
    "notification_bucket_total",
    "Pending cards classified into each due-date bucket",
    labelnames=["bucket"],
)
