import json
import logging
import sys

from book_discovery_api.context import request_id_var
from book_discovery_api.logging_config import JsonFormatter, configure_logging


def make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="book_discovery_api.main",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_expected_fields() -> None:
    formatter = JsonFormatter(service_name="book-discovery-api")

    payload = json.loads(formatter.format(make_record()))

    assert payload["service"] == "book-discovery-api"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "book_discovery_api.main"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload
    assert "request_id" not in payload


def test_json_formatter_emits_request_id_and_extras() -> None:
    formatter = JsonFormatter(service_name="book-discovery-api")

    token = request_id_var.set("req-456")
    try:
        payload = json.loads(formatter.format(make_record(status_code=200, latency_ms=1.5)))
    finally:
        request_id_var.reset(token)

    assert payload["request_id"] == "req-456"
    assert payload["status_code"] == 200
    assert payload["latency_ms"] == 1.5


def test_json_formatter_includes_exception() -> None:
    formatter = JsonFormatter(service_name="book-discovery-api")
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()

    payload = json.loads(formatter.format(record))

    assert "ValueError: boom" in payload["exception"]


def test_configure_logging_plain_text_format() -> None:
    configure_logging(level="DEBUG", output_format="plain", service_name="book-discovery-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert not isinstance(root_logger.handlers[0].formatter, JsonFormatter)


def test_configure_logging_json_format() -> None:
    configure_logging(level="info", output_format="JSON", service_name="book-discovery-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.INFO
    assert isinstance(root_logger.handlers[0].formatter, JsonFormatter)
