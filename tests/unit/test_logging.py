from __future__ import annotations

import json
import logging

from payload_hydrator.utils.logging import (
    JsonFormatter,
    _json_formatter,
    build_logging_config,
    configure_logging,
)

EXPECTED_FIELDS = 3
EXPECTED_MISSING = 1


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.fields = EXPECTED_FIELDS
    record.policy = "strict"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["fields"] == EXPECTED_FIELDS
    assert payload["policy"] == "strict"
    assert "pathname" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"missing": EXPECTED_MISSING}

    payload = json.loads(_json_formatter(record))

    assert payload["missing"] == EXPECTED_MISSING


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.duplicates = {"id"}

    payload = json.loads(_json_formatter(record))

    assert payload["duplicates"] == str({"id"})


def test_configure_logging_installs_json_handler() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(level="DEBUG", json_logs=True)

        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_without_force_keeps_existing_handlers() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    sentinel = logging.NullHandler()
    root.handlers = [sentinel]
    try:
        configure_logging(level="DEBUG", force=False)

        assert root.handlers == [sentinel]
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_logging_config_uses_one_stderr_handler() -> None:
    config = build_logging_config(level="debug")

    handler = config["handlers"]["stderr"]
    assert handler["level"] == "DEBUG"
    assert handler["formatter"] == "console"
    assert handler["stream"] == "ext://sys.stderr"
    assert config["root"] == {"handlers": ["stderr"], "level": "DEBUG"}


def test_logging_config_selects_json_formatter() -> None:
    config = build_logging_config(json_logs=True)

    assert config["handlers"]["stderr"]["formatter"] == "json"
    assert config["formatters"]["json"]["()"] is JsonFormatter
