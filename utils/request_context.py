"""Propagate the request ID through the call stack using contextvars."""

from contextvars import ContextVar
from contextlib import contextmanager

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def get_request_id() -> str | None:
    """
    Get current request ID from context.

    Returns None outside of a request (tests, scripts).
    """
    return _current_request_id.get()


def set_request_id(request_id: str) -> None:
    """
    Set current request ID in context.

    Called by RequestIDMiddleware when a request arrives.
    """
    _current_request_id.set(request_id)


def clear_request_id() -> None:
    """
    Clear request context.

    Must be called in finally block to prevent context leakage.
    """
    _current_request_id.set(None)


@contextmanager
def request_context(request_id: str):
    """
    Context manager for temporarily setting the request ID.

    Example:
        with request_context("req-123"):
            resp = success_response(data)  # meta.request_id == "req-123"
    """
    previous = _current_request_id.get()
    set_request_id(request_id)
    try:
        yield
    finally:
        if previous is None:
            clear_request_id()
        else:
            set_request_id(previous)
