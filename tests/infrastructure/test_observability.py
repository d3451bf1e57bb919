"""Tests for log setup and the JSON formatter."""

import json
import logging

import pytest

from whereismyfox.infrastructure.observability import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    handlers, level = list(logging.root.handlers), logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def _service_handlers():
    return [h for h in logging.root.handlers if h.get_name() == "whereismyfox"]


def test_repeated_setup_keeps_one_handler(restore_root_logger):
    first = setup_logging("INFO", "json")
    second = setup_logging("DEBUG", "text")

    assert first is second
    assert _service_handlers() == [first]
    assert not isinstance(first.formatter, JSONFormatter)
    assert logging.root.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty", "json")
    assert logging.root.level == logging.INFO


def test_json_formatter_includes_only_supplied_context():
    record = logging.LogRecord(
        "whereismyfox.services", logging.INFO, __file__, 1,
        "Device 3 commands replaced", None, None,
    )
    record.device_id = 3
    record.command_ids = [1, 2]

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "Device 3 commands replaced"
    assert entry["level"] == "INFO"
    assert entry["device_id"] == 3
    assert entry["command_ids"] == [1, 2]
    assert "user" not in entry
