"""Observability module for metrics and monitoring."""

from vectorbucket.observability.metrics import (
    get_metrics,
    get_metrics_content_type,
    track_items,
    track_operation,
)

__all__ = [
    "get_metrics",
    "get_metrics_content_type",
    "track_items",
    "track_operation",
]
