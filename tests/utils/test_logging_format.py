from __future__ import annotations

import json
import logging

from csvintake.utils.logging_setup import ExtraAwareFormatter, JsonLineFormatter


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="csvintake.main",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_extra_aware_formatter_without_extras() -> None:
    fmt = ExtraAwareFormatter("%(levelname)s | %(name)s | %(message)s")
    out = fmt.format(_record("Upload failed"))
    assert out == "ERROR | csvintake.main | Upload failed"


def test_extra_aware_formatter_appends_extras() -> None:
    rec = _record("Stored upload")
    rec.upload_id = "abc"
    rec.rows = 3
    fmt = ExtraAwareFormatter("%(levelname)s | %(message)s")
    assert fmt.format(rec) == "ERROR | Stored upload | upload_id=abc rows=3"


def test_json_line_formatter_includes_extras() -> None:
    rec = _record("Validated CSV")
    rec.total_rows = 7
    payload = json.loads(JsonLineFormatter().format(rec))
    assert payload["message"] == "Validated CSV"
    assert payload["level"] == "ERROR"
    assert payload["total_rows"] == 7
