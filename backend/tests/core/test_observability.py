"""Logging setup - verifies JSON lines and the query performance switch.

Tests:
    - Known extra fields are copied into the JSON line, unknown ones are not
    - The performance logger is silent unless query performance logging is on
"""

import json
import logging

import pytest

from media_tracker.infrastructure.observability import (
    JSONFormatter, performance_logger, setup_logging,
)


@pytest.fixture
def restore_logging():
    handlers, level = logging.root.handlers[:], logging.root.level
    performance_level = performance_logger.level
    yield
    logging.root.handlers = handlers
    logging.root.setLevel(level)
    performance_logger.setLevel(performance_level)


def test_json_line_carries_known_fields():
    record = logging.makeLogRecord({
        "name": "media_tracker.services",
        "levelname": "ERROR",
        "msg": "merge failed",
        "failed_step": "delete_merged",
        "completed_steps": ["save_survivor"],
        "unrelated": "dropped",
    })

    line = json.loads(JSONFormatter().format(record))

    assert line["message"] == "merge failed"
    assert line["failed_step"] == "delete_merged"
    assert line["completed_steps"] == ["save_survivor"]
    assert "unrelated" not in line


def test_setup_logging_replaces_root_handlers(restore_logging):
    setup_logging("INFO", "json")
    setup_logging("WARNING", "text")

    assert len(logging.root.handlers) == 1
    assert logging.root.level == logging.WARNING


@pytest.mark.parametrize("enabled, expected", [(True, True), (False, False)])
def test_query_performance_switch(restore_logging, enabled, expected):
    setup_logging("INFO", "json", query_performance=enabled)
    assert performance_logger.isEnabledFor(logging.DEBUG) is expected
