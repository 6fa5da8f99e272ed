import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue

from pythonjsonlogger.json import JsonFormatter

from filmorate_api.core.config import settings
from filmorate_api.core.trace import get_trace_id

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(module)s %(lineno)d %(trace_id)s %(service)s %(env)s"
)


class TraceContextFilter(logging.Filter):
    """Stamp trace_id/service/env on a record before it leaves the thread."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "trace_id", None) is None:
            record.trace_id = get_trace_id()
        if getattr(record, "service", None) is None:
            record.service = self.service
        if getattr(record, "env", None) is None:
            record.env = settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = "filmorate",
                       level: int | str = logging.INFO) -> None:
    """Route every log record through a queue to a JSON stdout handler."""
    global _listener
    if _listener is not None:
        shutdown_logging()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(JsonFormatter(LOG_FORMAT))

    q: Queue = Queue(-1)
    # the filter runs in the caller's context, where the trace id is bound
    queue_handler = QueueHandler(q)
    queue_handler.addFilter(TraceContextFilter(service))

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [queue_handler]

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    # the access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("logger_initialized",
                                     extra={"service": service})


def shutdown_logging() -> None:
    """Flush and stop the queue listener."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
