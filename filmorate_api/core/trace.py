"""Request-scoped trace id shared by the access log and service logs."""

import uuid
from contextvars import ContextVar, Token

TRACE_HEADER = "X-Request-Id"

_trace_id: ContextVar[str] = ContextVar("filmorate_trace_id", default="-")


def get_trace_id() -> str:
    return _trace_id.get()


def bind_trace_id(incoming: str | None = None) -> Token:
    """Bind the caller's request id, or a fresh one, to the current context."""
    value = (incoming or "").strip() or uuid.uuid4().hex
    return _trace_id.set(value[:64])


def unbind_trace_id(token: Token) -> None:
    _trace_id.reset(token)
