"""Tracing helpers for fetch operations.

Only the OpenTelemetry API is used; spans are no-ops unless the embedding
application installs and configures an SDK.
"""

import inspect
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

AttributeValue = str | int | float | bool

_TRACER_NAME = "docsearch"
_ARG_PREFIX = "docsearch."


def _attribute_value(value: Any) -> AttributeValue:
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


@contextmanager
def _span(name: str, attributes: dict[str, AttributeValue]) -> Iterator[trace.Span]:
    """Open a span and mark it OK, or ERROR with the exception recorded."""
    tracer = trace.get_tracer(_TRACER_NAME)
    with tracer.start_as_current_span(
        name, attributes=attributes, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
        span.set_status(Status(StatusCode.OK))


def traced(
    operation_name: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
    record: Iterable[str] = (),
) -> Callable:
    """Run the decorated function (sync or async) inside a span.

    Args:
        operation_name: Span name (defaults to module.qualname).
        attributes: Fixed attributes set on every span.
        record: Parameter names whose call values are set as
            `docsearch.<name>` attributes. None values are skipped and
            types are recorded by qualified name. Raw URIs should not be
            listed: query strings may carry credentials.
    """
    record = tuple(record)

    def decorator(func: Callable) -> Callable:
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)
        unknown = [name for name in record if name not in signature.parameters]
        if unknown:
            raise TypeError(f"{func.__qualname__} has no parameters named {unknown}")

        def _attributes(args: tuple, kwargs: dict) -> dict[str, AttributeValue]:
            collected = dict(attributes or {})
            if record:
                bound = signature.bind_partial(*args, **kwargs)
                for name in record:
                    value = bound.arguments.get(name)
                    if value is not None:
                        collected[_ARG_PREFIX + name] = _attribute_value(value)
            return collected

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _span(span_name, _attributes(args, kwargs)):
                    return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _span(span_name, _attributes(args, kwargs)):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, **attributes: AttributeValue) -> None:
    """Record a named event on the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes)
