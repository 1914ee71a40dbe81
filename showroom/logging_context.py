"""Request-scoped correlation ids for booking logs.

A transport adapter opens a ``request_scope()`` around each incoming
request. Every record that reaches a handler carrying ``RequestIdFilter``
gets a ``request_id`` attribute, and ``LOG_FORMAT`` prints it:

    2025-06-10 09:00:00 [REQ-1a2b3c4d] [showroom.scheduling.booking] INFO: Appointment ...

``load_config()`` installs the filter on the root handlers it configures.
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST = "-"

LOG_FORMAT = "%(asctime)s [%(request_id)s] [%(name)s] %(levelname)s: %(message)s"

_current: ContextVar[str] = ContextVar("showroom_request_id", default=NO_REQUEST)


def set_request_id(request_id: str) -> None:
    _current.set(request_id)


def get_request_id() -> str:
    return _current.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of one booking request."""
    token = _current.set(request_id or f"REQ-{uuid.uuid4().hex[:8]}")
    try:
        yield _current.get()
    finally:
        _current.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the active request id on records passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _current.get()  # type: ignore[attr-defined]
        return True


def install_request_id_filter(*handlers: logging.Handler) -> None:
    """Attach the filter to ``handlers``, or to every root handler if none given."""
    for handler in handlers or tuple(logging.getLogger().handlers):
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
