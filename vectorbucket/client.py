"""Shared S3 Vectors API client."""

from typing import Any

import boto3

from vectorbucket.config import AWSSettings, get_settings
from vectorbucket.logging_config import get_logger

logger = get_logger(__name__)

_client: Any = None


def create_client(settings: AWSSettings | None = None) -> Any:
    """Build a new S3 Vectors client.

    Args:
        settings: Connection settings. Uses configured values if not provided.

    Returns:
        boto3 ``s3vectors`` client.
    """
    settings = settings or get_settings().aws
    session = boto3.Session(profile_name=settings.profile)
    logger.debug(
        "Creating s3vectors client",
        extra={"region": settings.region, "endpoint_url": settings.endpoint_url},
    )
    return session.client(
        "s3vectors",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
    )


def get_client() -> Any:
    """Get the shared client, creating it on first use."""
    global _client
    if _client is None:
        _client = create_client()
    return _client


def set_client(client: Any) -> None:
    """Replace the shared client.

    Args:
        client: Client to use, or None to rebuild from settings on next use.
    """
    global _client
    _client = client
