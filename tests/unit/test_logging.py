"""Log records carry the request id from the request context."""

import logging

from humanika.shared.context import clear_request_context, set_request_context
from humanika.shared.telemetry.logging import RequestIdFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("humanika.test", logging.INFO, __file__, 1, "msg", None, None)


def test_filter_uses_request_id_from_context() -> None:
    set_request_context(request_id="req-42")
    try:
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "req-42"
    finally:
        clear_request_context()


def test_filter_outside_request_uses_dash() -> None:
    clear_request_context()
    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"
