"""Utility functions and decorators for distributed tracing."""

import asyncio
import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from taskhub.domain.exceptions import TaskHubException

# Allowlist of argument names recorded as span attributes. Request payloads
# (titles, descriptions, comment bodies) are never recorded.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "actor_id",
    "task_id",
    "subtask_id",
    "assignee_id",
    "status",
    "page",
    "size",
})


def _set_safe_span_attrs(span: trace.Span, arguments: dict[str, Any]) -> None:
    """Set span attributes from bound call arguments; only allowlisted names are recorded."""
    for key, value in arguments.items():
        if key in _SAFE_SPAN_ATTR_KEYS and value is not None:
            span.set_attribute(f"arg.{key}", str(getattr(value, "value", value)))


def _record_failure(span: trace.Span, exc: Exception) -> None:
    """Mark span as failed. Domain errors also carry their error code."""
    if isinstance(exc, TaskHubException):
        span.set_attribute("taskhub.error_code", exc.error_code)
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(operation_name: str | None = None) -> Callable:
    """Decorator to create a span around an async service method.

    Args:
        operation_name: Span name (defaults to module.qualname).

    Returns:
        Decorated coroutine function.
    """

    def decorator(func: Callable) -> Callable:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"@traced supports coroutine functions only: {func.__qualname__}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                try:
                    bound = signature.bind_partial(*args, **kwargs)
                except TypeError:
                    bound = None
                if bound is not None:
                    _set_safe_span_attrs(span, bound.arguments)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name, attributes=attributes or {})
