"""
Unit tests for structured logging configuration.

Tests cover:
- JSON rendering with application context
- Context binding and unbinding
"""

import json
import logging

import pytest
import structlog

from shared.logging import bind_context, clear_context, configure_logging, get_logger, unbind_context
from shared.logging import structured_logger


@pytest.fixture(autouse=True)
def reset_structlog():
    saved_context = dict(structured_logger._APP_CONTEXT)
    yield
    clear_context()
    structlog.reset_defaults()
    structured_logger._APP_CONTEXT.clear()
    structured_logger._APP_CONTEXT.update(saved_context)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)


def test_json_logs_include_app_context(capsys):
    configure_logging(log_level="INFO", json_logs=True, service_name="jokes-test", environment="staging")

    get_logger("tests.logging").info("something_happened", answer=42)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "something_happened"
    assert entry["answer"] == 42
    assert entry["app"] == "dad-jokes-demo"
    assert entry["service"] == "jokes-test"
    assert entry["environment"] == "staging"
    assert entry["level"] == "info"
    assert "timestamp" in entry


def test_bound_context_is_merged_and_removed(capsys):
    configure_logging(log_level="INFO", json_logs=True)
    logger = get_logger("tests.context")

    bind_context(correlation_id="abc")
    logger.info("with_context")
    unbind_context("correlation_id")
    logger.info("without_context")

    first, second = [json.loads(l) for l in capsys.readouterr().out.strip().splitlines()[-2:]]
    assert first["correlation_id"] == "abc"
    assert "correlation_id" not in second


def test_level_filters_debug(capsys):
    configure_logging(log_level="WARNING", json_logs=True)

    get_logger("tests.level").info("hidden")

    assert "hidden" not in capsys.readouterr().out
