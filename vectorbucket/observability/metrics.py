"""Prometheus metrics for vector index operations.

Provides metrics instrumentation for:
- Remote API call latency and counts
- Items written, removed and returned
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

# Remote API Metrics
VECTORSTORE_OPERATION_DURATION = Histogram(
    "vectorstore_operation_duration_seconds",
    "Vector store operation duration",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0],
)

VECTORSTORE_OPERATION_TOTAL = Counter(
    "vectorstore_operations_total",
    "Total vector store operations",
    ["operation", "status"],
)

# Item Metrics
VECTORSTORE_ITEMS_TOTAL = Counter(
    "vectorstore_items_total",
    "Items moved to or from the vector store",
    ["operation"],  # "operation" label values: put, delete, get, list, query
)


@contextmanager
def track_operation(operation: str) -> Iterator[None]:
    """Time a remote operation and count it by outcome.

    Exceptions are recorded with an ``error`` status and re-raised.

    Args:
        operation: Remote operation name (e.g. ``put_vectors``).
    """
    start_time = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        VECTORSTORE_OPERATION_DURATION.labels(
            operation=operation, status=status
        ).observe(duration)
        VECTORSTORE_OPERATION_TOTAL.labels(operation=operation, status=status).inc()


def track_items(operation: str, count: int) -> None:
    """Count items moved by a remote operation.

    Args:
        operation: Item operation (put, delete, get, list, query).
        count: Number of items.
    """
    VECTORSTORE_ITEMS_TOTAL.labels(operation=operation).inc(count)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for a metrics response."""
    return CONTENT_TYPE_LATEST
