import io
import json
import logging
import sys

import pytest

from coachgen.logging import ContextTextFormatter, JSONFormatter, context_fields, setup_logging


def _record(msg="Generated four-day day 1", exc_info=None, **extra):
    record = logging.LogRecord(
        name="coachgen.engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_fields_strip_prefix():
    record = _record(coachgen_program_type="two-day", coachgen_day=2, unrelated="x")
    assert context_fields(record) == {"program_type": "two-day", "day": 2}


class TestJSONFormatter:
    def test_single_line_json(self):
        line = JSONFormatter().format(_record())
        assert "\n" not in line
        entry = json.loads(line)
        assert entry["level"] == "INFO"
        assert entry["logger"] == "coachgen.engine"
        assert entry["message"] == "Generated four-day day 1"
        assert "timestamp" in entry

    def test_context_fields_included(self):
        entry = json.loads(JSONFormatter().format(
            _record(coachgen_program_type="four-day", coachgen_day=1, unrelated="x"),
        ))
        assert entry["program_type"] == "four-day"
        assert entry["day"] == 1
        assert "unrelated" not in entry
        assert "coachgen_day" not in entry

    def test_context_cannot_override_base_keys(self):
        entry = json.loads(JSONFormatter().format(_record(coachgen_message="spoofed")))
        assert entry["message"] == "Generated four-day day 1"

    def test_exception_text(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]

    def test_non_ascii_kept(self):
        entry = json.loads(JSONFormatter().format(_record(msg="Térd domináns")))
        assert entry["message"] == "Térd domináns"


class TestContextTextFormatter:
    def test_context_suffix_sorted(self):
        line = ContextTextFormatter().format(_record(coachgen_program_type="four-day", coachgen_day=1))
        assert line.endswith("INFO coachgen.engine: Generated four-day day 1 [day=1 program_type=four-day]")

    def test_no_suffix_without_context(self):
        line = ContextTextFormatter().format(_record())
        assert line.endswith("coachgen.engine: Generated four-day day 1")


@pytest.fixture
def restore_loggers():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    libraries = {name: logging.getLogger(name).level for name in ("httpx", "httpcore", "psycopg")}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, library_level in libraries.items():
        logging.getLogger(name).setLevel(library_level)


@pytest.mark.parametrize("log_format,formatter_type", [("json", JSONFormatter), ("text", ContextTextFormatter)])
def test_setup_logging(restore_loggers, log_format, formatter_type):
    setup_logging(log_format, logging.DEBUG)
    root = restore_loggers
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert type(root.handlers[0].formatter) is formatter_type


def test_setup_logging_string_level(restore_loggers):
    setup_logging("text", "debug")
    assert restore_loggers.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_library_loggers_quiet_at_info(restore_loggers):
    setup_logging("json")
    assert restore_loggers.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("psycopg").level == logging.WARNING


def test_setup_logging_writes_to_stream(restore_loggers):
    stream = io.StringIO()
    setup_logging("json", stream=stream)
    logging.getLogger("coachgen.test").info("hello", extra={"coachgen_day": 2})
    entry = json.loads(stream.getvalue().strip())
    assert entry["message"] == "hello"
    assert entry["day"] == 2


def test_unknown_format_rejected():
    with pytest.raises(ValueError, match="log_format"):
        setup_logging("xml")


def test_unknown_level_rejected(restore_loggers):
    handlers = restore_loggers.handlers[:]
    with pytest.raises(ValueError, match="unknown log level: 'BOGUS'"):
        setup_logging("text", "BOGUS")
    assert restore_loggers.handlers == handlers
