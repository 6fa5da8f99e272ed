import logging

from filmorate_api.core.logger import TraceContextFilter
from filmorate_api.core.sentry import init_sentry
from filmorate_api.core.trace import (
    bind_trace_id,
    get_trace_id,
    unbind_trace_id,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)


def test_trace_id_bind_and_unbind():
    token = bind_trace_id("req-1")
    try:
        assert get_trace_id() == "req-1"
    finally:
        unbind_trace_id(token)
    assert get_trace_id() == "-"


def test_blank_incoming_trace_id_gets_generated():
    token = bind_trace_id("   ")
    try:
        assert len(get_trace_id()) == 32
    finally:
        unbind_trace_id(token)


def test_filter_stamps_trace_and_service():
    token = bind_trace_id("req-2")
    try:
        record = _record()
        assert TraceContextFilter("filmorate").filter(record) is True
    finally:
        unbind_trace_id(token)
    assert record.trace_id == "req-2"
    assert record.service == "filmorate"


def test_filter_keeps_explicit_extra():
    record = _record()
    record.service = "other"
    TraceContextFilter("filmorate").filter(record)
    assert record.service == "other"


def test_sentry_disabled_without_dsn():
    assert init_sentry("") is False
