"""Tests for logging configuration."""

import io
import json
import logging
from unittest.mock import patch

from vectorbucket.config import Environment, Settings
from vectorbucket.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def make_record(msg: str, level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    """Build a log record with optional extra attributes."""
    record = logging.LogRecord(
        name="vectorbucket.index.service",
        level=level,
        pathname="/app/vectorbucket/index/service.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(make_record("Created index: items")))

        assert data["level"] == "INFO"
        assert data["logger"] == "vectorbucket.index.service"
        assert data["message"] == "Created index: items"
        assert data["file"] == "/app/vectorbucket/index/service.py:42"
        assert "timestamp" in data

    def test_format_index_context(self) -> None:
        """Bucket, index and count extras are carried into the output."""
        record = make_record("Put 3 vectors", bucket="b", index="items", count=3)

        data = json.loads(JSONFormatter().format(record))

        assert data["bucket"] == "b"
        assert data["index"] == "items"
        assert data["count"] == 3

    def test_format_client_context(self) -> None:
        """Region and endpoint extras from client creation are kept."""
        record = make_record(
            "Creating s3vectors client",
            level=logging.DEBUG,
            region="us-east-2",
            endpoint_url="http://localhost:4566",
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["region"] == "us-east-2"
        assert data["endpoint_url"] == "http://localhost:4566"
        assert "bucket" not in data

    def test_format_with_exception(self) -> None:
        """Exception info is included in output."""
        try:
            raise ValueError("test error")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        record = make_record("Error", level=logging.ERROR)
        record.exc_info = exc_info

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level and logger name."""
        output = DevFormatter().format(make_record("Dropped", level=logging.WARNING))

        assert "WARNING" in output
        assert "vectorbucket.index.service" in output
        assert "Dropped" in output


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        """setup_logging returns root logger."""
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger()

    def test_uses_json_in_production(self) -> None:
        """JSON output is used in production environment."""
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("vectorbucket.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        """Dev formatter is used in development environment."""
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("vectorbucket.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, DevFormatter)

    def test_level_override(self) -> None:
        """Log level can be overridden."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_quiets_aws_sdk(self) -> None:
        """boto3 and botocore only log warnings and above."""
        setup_logging(level="DEBUG", json_output=False)

        assert logging.getLogger("botocore").level == logging.WARNING
        assert logging.getLogger("boto3").level == logging.WARNING

    def test_custom_stream(self) -> None:
        """Records are written to the given stream."""
        stream = io.StringIO()
        setup_logging(level="INFO", json_output=True, stream=stream)

        get_logger("vectorbucket.test").info("hello", extra={"index": "items"})

        data = json.loads(stream.getvalue())
        assert data["message"] == "hello"
        assert data["index"] == "items"


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        logger = get_logger("vectorbucket.client")
        assert logger.name == "vectorbucket.client"
