"""Logging configuration tests."""

from __future__ import annotations

import json
import logging

import pytest
from invoice_batch_queue.logging_setup import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_renders_message_and_extra_fields() -> None:
    record = logging.makeLogRecord(
        {
            "name": "invoice_batch_queue.batch_publishing",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "Kafka produce batch: entry=%s",
            "args": ("1",),
            "invoice_id": "INV-1",
        }
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Kafka produce batch: entry=1"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "invoice_batch_queue.batch_publishing"
    assert payload["invoice_id"] == "INV-1"


def test_configure_logging_selects_formatter_and_level(restore_root_logger) -> None:
    configure_logging(level="DEBUG", json_logs=True)

    assert restore_root_logger.level == logging.DEBUG
    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    configure_logging(level="WARNING", json_logs=False)

    assert restore_root_logger.level == logging.WARNING
    assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
