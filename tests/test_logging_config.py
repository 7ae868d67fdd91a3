from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("weather", logging.INFO, __file__, 1, "Applied weather reading", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    message = formatter.format(_record(buffer_size=3, state="populating", unrelated="x"))

    assert message == "Applied weather reading | buffer_size=3 state=populating"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["reason"])

    assert formatter.format(_record(reason=None)) == "Applied weather reading"
    assert formatter.format(_record()) == "Applied weather reading"
