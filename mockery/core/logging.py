"""Structured logging setup with invocation context propagation.

Records emitted while a mock dispatches a call, including records logged by
registered behaviors, carry the mock's name and the invoked function, plus the line of the mock
method body that forwarded the call.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Identifiers of the mock call currently being dispatched."""

    mock_name: str | None = None
    function: str | None = None
    call_site: str | None = None


_EMPTY_CONTEXT = InvocationContext()
_INVOCATION_CONTEXT: contextvars.ContextVar[InvocationContext | None] = contextvars.ContextVar(
    "mockery_invocation_context",
    default=None,
)


def get_invocation_context() -> InvocationContext:
    context = _INVOCATION_CONTEXT.get()
    if context is None:
        return _EMPTY_CONTEXT
    return context


class InvocationContextFilter(logging.Filter):
    """Inject invocation fields into every ``LogRecord`` before formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_invocation_context()
        record.mock_name = context.mock_name
        record.function = context.function
        record.call_site = context.call_site
        return True


class _JsonFormatter(logging.Formatter):
    """Render logs as compact JSON for machine-readable ingestion."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object | None] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "mock_name": getattr(record, "mock_name", None),
            "function": getattr(record, "function", None),
            "call_site": getattr(record, "call_site", None),
        }
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(level: int | str = logging.WARNING, json_output: bool = False) -> None:
    """Configure the ``mockery`` logger once with an invocation-aware handler.

    Only the library's own logger is touched so the host test suite keeps
    control of the root logger.
    """

    package_logger = logging.getLogger("mockery")
    package_logger.setLevel(level if isinstance(level, int) else level.upper())
    package_logger.handlers.clear()
    package_logger.filters.clear()

    handler = logging.StreamHandler(stream=sys.stdout)
    if json_output:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s "
            "mock=%(mock_name)s function=%(function)s at=%(call_site)s "
            "%(message)s",
        )
    handler.setFormatter(formatter)

    context_filter = InvocationContextFilter()
    handler.addFilter(context_filter)
    package_logger.addFilter(context_filter)
    package_logger.addHandler(handler)


@contextmanager
def invocation_scope(
    *,
    mock_name: str | None = None,
    function: str | None = None,
    call_site: str | None = None,
) -> Iterator[None]:
    """Temporarily apply invocation identifiers to the current context.

    Nested scopes inherit outer values unless explicitly overridden, so a
    behavior that calls into a second mock is logged under the inner call.
    """

    current = get_invocation_context()
    updated = InvocationContext(
        mock_name=current.mock_name if mock_name is None else mock_name,
        function=current.function if function is None else function,
        call_site=current.call_site if call_site is None else call_site,
    )
    token: contextvars.Token[InvocationContext | None] = _INVOCATION_CONTEXT.set(updated)
    try:
        yield
    finally:
        _INVOCATION_CONTEXT.reset(token)


__all__ = [
    "InvocationContext",
    "InvocationContextFilter",
    "get_invocation_context",
    "invocation_scope",
    "setup_logging",
]
