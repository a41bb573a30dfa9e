"""
Tracer protocol and implementations for composition-based tracing.

The middleware never talks to a process-wide tracer directly. A tracer is
injected at construction instead, which keeps the tracer provider explicit
and makes the middleware trivial to exercise in tests.

Example:
    >>> from opentelemetry.sdk.trace import TracerProvider
    >>> from jobtrace.observability import create_tracer, NullTracer
    >>>
    >>> # Tracer bound to an explicit provider
    >>> tracer = create_tracer(__name__, tracer_provider=TracerProvider())
    >>>
    >>> # Or explicitly disable tracing
    >>> tracer = NullTracer()
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator, Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from opentelemetry import trace

if TYPE_CHECKING:
    from opentelemetry.context import Context
    from opentelemetry.trace import Link, Span, TracerProvider


class SpanKindEnum(Enum):
    """
    Span kinds for distributed tracing.

    Mapped onto OpenTelemetry's SpanKind by OpenTelemetryTracer.

    Values:
        INTERNAL: Default span kind for internal operations
        PRODUCER: For enqueueing jobs
        CONSUMER: For processing jobs pulled from a queue
        CLIENT: For client operations
        SERVER: For server operations
    """

    INTERNAL = "internal"
    PRODUCER = "producer"
    CONSUMER = "consumer"
    CLIENT = "client"
    SERVER = "server"


_KIND_MAPPING = {
    SpanKindEnum.INTERNAL: trace.SpanKind.INTERNAL,
    SpanKindEnum.PRODUCER: trace.SpanKind.PRODUCER,
    SpanKindEnum.CONSUMER: trace.SpanKind.CONSUMER,
    SpanKindEnum.CLIENT: trace.SpanKind.CLIENT,
    SpanKindEnum.SERVER: trace.SpanKind.SERVER,
}


@runtime_checkable
class Tracer(Protocol):
    """
    Protocol for tracers that can create tracing spans.

    Implementations:
    - NullTracer: No-op tracer for when tracing is disabled
    - OpenTelemetryTracer: Wrapper around an OpenTelemetry tracer
    - MockTracer: Records span requests for assertions in tests
    """

    @property
    def enabled(self) -> bool:
        """True if the tracer creates real spans."""
        ...

    def start_span(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
        links: Sequence[Link] | None = None,
    ) -> Span | None:
        """
        Start a span that the caller must end.

        Unlike `span_with_kind()`, the span is not made current and is not
        ended automatically. Pass an empty ``Context()`` as ``context`` to
        start a root span regardless of what is currently active.

        Args:
            name: Span name (e.g., "default process")
            kind: The span kind (CONSUMER for job execution)
            attributes: Span attributes (optional)
            context: Parent context (optional, defaults to the current one)
            links: Causal links to other span contexts (optional)

        Returns:
            The Span if tracing is enabled, None otherwise.
            Caller MUST call span.end() when the operation is complete.
        """
        ...

    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
    ) -> AbstractContextManager[Span | None]:
        """
        Create a span context manager that makes the span current.

        The span is a child of ``context`` (or of the current context), is
        ended on exit, and records any exception raised inside the block.

        Args:
            name: Span name
            kind: The span kind
            attributes: Span attributes (optional)
            context: Parent context (optional)

        Returns:
            Context manager that yields Span or None
        """
        ...


class NullTracer:
    """
    No-op tracer implementation for when tracing is disabled.

    Example:
        >>> tracer = NullTracer()
        >>> with tracer.span_with_kind("default process"):  # Does nothing
        ...     run_job()
        >>> tracer.enabled  # False
    """

    @property
    def enabled(self) -> bool:
        """Always returns False for NullTracer."""
        return False

    def start_span(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
        links: Sequence[Link] | None = None,
    ) -> None:
        """Return None (no-op for disabled tracing)."""
        return None

    @contextlib.contextmanager
    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
    ) -> Generator[None, None, None]:
        """Create a no-op span context with kind (yields None)."""
        yield None


class OpenTelemetryTracer:
    """
    OpenTelemetry tracer implementation.

    Args:
        tracer_name: Name for the tracer (typically __name__)
        tracer_provider: Provider to obtain the tracer from. Defaults to the
            globally registered provider.

    Example:
        >>> tracer = OpenTelemetryTracer(__name__, tracer_provider=provider)
        >>> span = tracer.start_span("default process", kind=SpanKindEnum.CONSUMER)
        >>> span.end()
    """

    def __init__(
        self,
        tracer_name: str,
        tracer_provider: TracerProvider | None = None,
    ) -> None:
        self._tracer = trace.get_tracer(tracer_name, tracer_provider=tracer_provider)

    @property
    def enabled(self) -> bool:
        """Always returns True for OpenTelemetryTracer."""
        return True

    def start_span(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
        links: Sequence[Link] | None = None,
    ) -> Span:
        """
        Start a new span with SpanKind and optional links.

        Returns:
            The OpenTelemetry Span. Caller MUST call span.end().
        """
        return self._tracer.start_span(
            name,
            context=context,
            kind=_KIND_MAPPING.get(kind, trace.SpanKind.INTERNAL),
            attributes=attributes or {},
            links=links,
        )

    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
    ) -> AbstractContextManager[Span | None]:
        """
        Create an OpenTelemetry span context with SpanKind.

        Returns:
            Context manager yielding the OpenTelemetry Span
        """
        return self._tracer.start_as_current_span(
            name,
            context=context,
            kind=_KIND_MAPPING.get(kind, trace.SpanKind.INTERNAL),
            attributes=attributes or {},
        )


@dataclass
class MockSpanRecord:
    """A span request captured by MockTracer."""

    name: str
    kind: SpanKindEnum
    attributes: dict[str, Any] | None
    links: list[Link] = field(default_factory=list)
    context: Context | None = None


class MockTracer:
    """
    Mock tracer for testing that records span information.

    Example:
        >>> tracer = MockTracer()
        >>> with tracer.span_with_kind("default process", attributes={"k": "v"}):
        ...     pass
        >>> assert tracer.span_names == ["default process"]
    """

    def __init__(self) -> None:
        """Initialize MockTracer with empty span list."""
        self.spans: list[MockSpanRecord] = []

    @property
    def enabled(self) -> bool:
        """Returns True to enable attribute computation in tests."""
        return True

    @property
    def span_names(self) -> list[str]:
        """Get just the span names for easy assertions."""
        return [record.name for record in self.spans]

    def clear(self) -> None:
        """Clear recorded spans."""
        self.spans.clear()

    def start_span(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
        links: Sequence[Link] | None = None,
    ) -> None:
        """Record span and return None (mock spans don't need to be ended)."""
        self.spans.append(MockSpanRecord(name, kind, attributes, list(links or []), context))
        return None

    @contextlib.contextmanager
    def span_with_kind(
        self,
        name: str,
        kind: SpanKindEnum = SpanKindEnum.INTERNAL,
        attributes: dict[str, Any] | None = None,
        context: Context | None = None,
    ) -> Generator[None, None, None]:
        """Record span with kind and yield None."""
        self.spans.append(MockSpanRecord(name, kind, attributes, [], context))
        yield None


def create_tracer(
    name: str,
    enable_tracing: bool = True,
    tracer_provider: TracerProvider | None = None,
) -> Tracer:
    """
    Factory function to create the appropriate tracer.

    Args:
        name: Tracer name (typically __name__)
        enable_tracing: Whether tracing should be enabled (default True)
        tracer_provider: Provider for the OpenTelemetry tracer (optional)

    Returns:
        OpenTelemetryTracer if enabled, NullTracer otherwise
    """
    if enable_tracing:
        return OpenTelemetryTracer(name, tracer_provider=tracer_provider)
    return NullTracer()


__all__ = [
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "MockSpanRecord",
    "SpanKindEnum",
    "create_tracer",
]
