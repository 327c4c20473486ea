"""Tests for logging configuration"""
import io
import json
import tempfile
import os
import logging
from pathlib import Path
from unittest.mock import patch

from config import Config
from logging_config import (
    setup_structured_logging,
    get_logger,
    log_metrics_collection,
    log_server_startup,
    log_error
)


class TestLoggingConfig:
    """Test logging configuration and structured logging"""

    def test_setup_structured_logging(self):
        """Test structured logging setup"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "logs" / "test.log"
            config = Config(log_file=log_file, log_level="DEBUG")

            setup_structured_logging(config)

            assert log_file.parent.exists()
            logger = logging.getLogger("test")
            assert logger.isEnabledFor(logging.DEBUG)

    def test_json_output_to_stream(self):
        """Test production logs are JSON lines on the given stream"""
        stream = io.StringIO()
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            setup_structured_logging(Config(), stream=stream)
            get_logger("test_stream").info("Hello", key="value")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "Hello"
        assert record["key"] == "value"
        assert record["level"] == "info"
        assert record["logger"] == "test_stream"

    def test_get_logger(self):
        """Test getting structured logger"""
        logger = get_logger("test_logger")

        assert logger is not None
        assert hasattr(logger, 'info')
        assert hasattr(logger, 'error')
        assert hasattr(logger, 'debug')
        assert hasattr(logger, 'warning')

    def test_log_metrics_collection(self):
        """Test structured metrics collection logging"""
        logger = get_logger("test")

        log_metrics_collection(logger, metrics_count=10, collection_time=0.5)
        log_metrics_collection(logger, metrics_count=5, collection_time=1.2, active_vcl="boot", unrecognized=1)

    def test_log_server_startup(self):
        logger = get_logger("test")

        log_server_startup(logger, Config())

    def test_log_error(self):
        """Test structured error logging"""
        stream = io.StringIO()
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            setup_structured_logging(Config(), stream=stream)
            try:
                raise ValueError("Test error")
            except ValueError as e:
                log_error(get_logger("test_error"), e, {"component": "test"})

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["error"] == "Test error"
        assert record["error_type"] == "ValueError"
        assert record["context"] == {"component": "test"}
        assert "Traceback" in record["exception"]

    def test_development_logging(self):
        """Test console rendering in development"""
        stream = io.StringIO()
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            setup_structured_logging(Config(), stream=stream)
            get_logger("test_dev").info("Test development log")

        assert "Test development log" in stream.getvalue()
