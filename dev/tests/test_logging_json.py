import io
import json
import logging
import sys

from patchbin.exceptions import PatternNotFound
from patchbin.logging_config import FastFormatter, JsonFormatter, get_logger, setup_logging


def test_json_formatter_outputs_expected_fields():
    record = logging.LogRecord(
        name="patchbin.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=123,
        msg="hello",
        args=(),
        exc_info=None,
    )

    formatter = JsonFormatter()
    payload = json.loads(formatter.format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "patchbin.test"
    assert payload["message"] == "hello"
    assert payload["pathname"] == __file__
    assert payload["lineno"] == 123
    assert "timestamp" in payload
    assert "thread" in payload
    assert "process" in payload


def test_json_formatter_includes_exc_info():
    formatter = JsonFormatter()
    try:
        raise ValueError("boom")
    except Exception:
        record = logging.LogRecord(
            name="patchbin.test",
            level=logging.ERROR,
            pathname=__file__,
            lineno=55,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = json.loads(formatter.format(record))
    assert "exc_info" in payload
    assert "ValueError" in payload["exc_info"]


def test_structured_error_details_are_emitted():
    stream = io.StringIO()
    setup_logging(log_level="INFO", structured_json=True, stream=stream)

    error = PatternNotFound(pattern=b"MARK")
    get_logger("test").error("%s", error, extra={"error": error.to_dict()})

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["logger"] == "patchbin.test"
    assert payload["error"]["error_code"] == "PATTERN_NOT_FOUND"
    assert payload["error"]["details"]["pattern"] == b"MARK".hex()


def test_plain_formatter_and_log_file(tmp_path):
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "patchbin.log"
    setup_logging(log_level="DEBUG", log_file=str(log_file), structured_json=False, stream=stream)

    get_logger("test").info("Patching 0201")
    for handler in logging.getLogger("patchbin").handlers:
        handler.flush()

    assert "INFO    Patching 0201" in stream.getvalue()
    assert "Patching 0201" in log_file.read_text(encoding="utf-8")
    assert not FastFormatter().colors
