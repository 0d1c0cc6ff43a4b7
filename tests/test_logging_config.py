"""Tests for logging configuration and formatters."""

import json
import logging
import sys

import pytest

from cleaner.logging import ComponentLoggerAdapter, get_logger
from cleaner.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from cleaner.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def logger():
    """Create a test logger with no handlers attached."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way configure_logging() found it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def make_key_value_formatter():
    return KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert "timestamp" in log_obj
    assert "name" not in log_obj


def test_json_formatter_with_extra_fields(logger):
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Region cleaned",
        (),
        None,
        extra={"event": "reconcile.region.cleaned", "applied": ["quotes"], "reverted": False},
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "reconcile.region.cleaned"
    assert log_obj["applied"] == ["quotes"]
    assert log_obj["reverted"] is False


def test_json_formatter_stringifies_unknown_types(logger):
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"path": object()}
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert isinstance(log_obj["path"], str)


def test_timestamp_format_in_json(logger):
    """Timestamps are ISO-8601 UTC with millisecond precision: YYYY-MM-DDTHH:MM:SS.sssZ."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    timestamp = json.loads(JSONFormatter().format(record))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24


def test_contextual_filter_adds_static_fields(logger):
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    with log_context(run_id="abc123", file_path="src/app.js"):
        record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
        ContextualFilter().filter(record)

    assert record.run_id == "abc123"
    assert record.file_path == "src/app.js"
    assert record.service == SERVICE_NAME


def test_contextual_filter_keeps_explicit_extra(logger):
    with log_context(file_path="from-context.js"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"file_path": "explicit.js"}
        )
        ContextualFilter().filter(record)

    assert record.file_path == "explicit.js"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    filter = ContextualFilter(service="code-cleaner", environment="test")

    with log_context(run_id="abc123", file_path="src/app.js"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Cleaning file",
            (),
            None,
            extra={"event": "pipeline.file.cleaned"},
        )
        filter.filter(record)
        log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["message"] == "Cleaning file"
    assert log_obj["event"] == "pipeline.file.cleaned"
    assert log_obj["service"] == "code-cleaner"
    assert log_obj["environment"] == "test"
    assert log_obj["run_id"] == "abc123"
    assert log_obj["file_path"] == "src/app.js"


def test_key_value_formatter_basic(logger):
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    output = make_key_value_formatter().format(record)

    assert "[INFO]" in output
    assert "Test message" in output


def test_key_value_formatter_with_extras(logger):
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Similarity index",
        (),
        None,
        extra={
            "event": "pipeline.file.cleaned",
            "score": 0.5,
            "written": True,
            "error_message": None,
            "file_path": "my file.js",
        },
    )

    output = make_key_value_formatter().format(record)

    assert "event=pipeline.file.cleaned" in output
    assert "score=0.5000" in output
    assert "written=true" in output
    assert "error_message=null" in output
    assert 'file_path="my file.js"' in output


def test_key_value_formatter_skips_service_fields(logger):
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
    ContextualFilter(service="code-cleaner", environment="test").filter(record)

    output = make_key_value_formatter().format(record)

    assert "service=" not in output
    assert "environment=" not in output


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    configure_logging(level="debug", format_type="json", environment="test")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert handler.stream is sys.stderr


def test_configure_logging_key_value_format(restore_root_logger):
    configure_logging(level="WARNING", format_type="key-value", environment="test")

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, KeyValueFormatter)
    assert restore_root_logger.level == logging.WARNING


def test_get_logger_with_component_tags_records(caplog):
    component_logger = get_logger("cleaner.test", component="reconcile")

    with caplog.at_level(logging.INFO, logger="cleaner.test"):
        component_logger.info("Reconciled", extra={"event": "reconcile.completed"})

    assert isinstance(component_logger, ComponentLoggerAdapter)
    record = caplog.records[-1]
    assert record.component == "reconcile"
    assert record.event == "reconcile.completed"


def test_get_logger_without_component_returns_plain_logger():
    assert isinstance(get_logger("cleaner.test"), logging.Logger)
