"""Span helpers for the resolve / execute path."""

import contextlib
from typing import Any, Optional

from opentelemetry import trace
from cdkrun.config import ENABLE_OTEL

TRACER_NAME = "cdkrun"


def set_span_attributes(span: Optional[Any], **attrs) -> None:
    """Set ``cdkrun.*`` attributes on ``span``; None values and a None span are skipped."""
    if span is None:
        return
    for k, v in attrs.items():
        if v is not None:
            span.set_attribute(f"cdkrun.{k}", v)


@contextlib.asynccontextmanager
async def traced_span(name: str, **attrs):
    """
    Async context manager yielding the current span, or None when tracing is
    disabled, so callers can attach attributes learned while running
    (execution ARN, poll count, outcome).
    """
    if not ENABLE_OTEL:
        yield None
        return

    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        set_span_attributes(span, **attrs)
        yield span
