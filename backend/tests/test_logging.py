import json
import logging
import sys

from upload_gateway.core.logging import JsonLogFormatter


def test_json_formatter_emits_single_line_with_extra_and_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            name="upload_gateway.services.upload",
            level=logging.ERROR,
            pathname=__file__,
            lineno=10,
            msg="Failed to upload %s",
            args=("images/a.png",),
            exc_info=sys.exc_info(),
        )
    record.bucket = "test-bucket"

    line = JsonLogFormatter().format(record)
    entry = json.loads(line)

    assert "\n" not in line
    assert entry["severity"] == "ERROR"
    assert entry["message"] == "Failed to upload images/a.png"
    assert entry["bucket"] == "test-bucket"
    assert entry["exception_type"] == "RuntimeError"
    assert "boom" in entry["exception"]
