"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from vectorbucket.client import set_client
from vectorbucket.config import get_settings


@pytest.fixture
def mock_client() -> Generator[MagicMock, None, None]:
    """Create a mock s3vectors client installed as the shared client.

    Yields:
        MagicMock with empty default responses.
    """
    client = MagicMock()
    client.get_index.return_value = {
        "index": {
            "vectorBucketName": "test-bucket",
            "indexName": "items",
            "dataType": "float32",
            "dimension": 3,
            "distanceMetric": "cosine",
        }
    }
    client.get_vectors.return_value = {"vectors": []}
    client.list_vectors.return_value = {"vectors": []}
    client.query_vectors.return_value = {"vectors": [], "distanceMetric": "cosine"}
    set_client(client)
    yield client
    set_client(None)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
