"""Tests for observability module."""

from unittest.mock import MagicMock

import pytest
from prometheus_client import REGISTRY

from vectorbucket.index import Index
from vectorbucket.observability.metrics import (
    get_metrics,
    get_metrics_content_type,
    track_items,
    track_operation,
)


def sample(name: str, **labels: str) -> float:
    """Read a sample value from the default registry."""
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestTrackOperation:
    """Tests for the remote operation timer."""

    def test_success_is_counted(self) -> None:
        """Successful operations are counted with success status."""
        before = sample(
            "vectorstore_operations_total", operation="test_op", status="success"
        )

        with track_operation("test_op"):
            pass

        after = sample(
            "vectorstore_operations_total", operation="test_op", status="success"
        )
        assert after == before + 1

    def test_error_is_counted_and_reraised(self) -> None:
        """Failing operations are counted with error status."""
        before = sample(
            "vectorstore_operations_total", operation="test_fail", status="error"
        )

        with pytest.raises(RuntimeError):
            with track_operation("test_fail"):
                raise RuntimeError("boom")

        after = sample(
            "vectorstore_operations_total", operation="test_fail", status="error"
        )
        assert after == before + 1

    def test_duration_is_observed(self) -> None:
        """Operation duration lands in the histogram."""
        with track_operation("test_timed"):
            pass

        count = sample(
            "vectorstore_operation_duration_seconds_count",
            operation="test_timed",
            status="success",
        )
        assert count >= 1


class TestMetricsFunctions:
    """Tests for metrics helpers."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    def test_content_type(self) -> None:
        """Content type is the Prometheus text format."""
        assert get_metrics_content_type().startswith("text/plain")

    def test_track_items(self) -> None:
        """track_items increments by the item count."""
        before = sample("vectorstore_items_total", operation="test_items")

        track_items("test_items", 7)

        assert sample("vectorstore_items_total", operation="test_items") == before + 7


class TestIndexInstrumentation:
    """Index calls are recorded."""

    def test_put_vectors_recorded(self) -> None:
        """Writes count operations and items."""
        client = MagicMock()
        index = Index("items", bucket="b", dimensions=2, distance="cosine", client=client)
        ops_before = sample(
            "vectorstore_operations_total", operation="put_vectors", status="success"
        )
        items_before = sample("vectorstore_items_total", operation="put")

        index.add_all([{"id": "a", "vector": [0, 1]}, {"id": "b", "vector": [1, 0]}])

        assert (
            sample("vectorstore_operations_total", operation="put_vectors", status="success")
            == ops_before + 1
        )
        assert sample("vectorstore_items_total", operation="put") == items_before + 2

        metrics = get_metrics().decode()
        assert "vectorstore_operation_duration_seconds" in metrics
