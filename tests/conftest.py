"""
Shared pytest fixtures for the jobtrace library tests.

This module provides:
- OpenTelemetry fixtures (span_exporter, tracer_provider, otel_tracer)
- Propagation fixtures (propagator, producer_span_context, traced_message)
- Sample data fixtures (job_message, job_descriptor, fixed clocks)

Tracing fixtures never touch the global tracer provider: every test gets
its own provider and in-memory exporter.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from jobtrace import JobDescriptor, OpenTelemetryTracer

# Import shared data from fixtures module
from tests.fixtures import CREATED_AT, ENQUEUED_AT, NOW

# ============================================================================
# Time
# ============================================================================


@pytest.fixture
def clock() -> Callable[[], float]:
    """Clock frozen at NOW."""
    return lambda: NOW


# ============================================================================
# OpenTelemetry Fixtures
# ============================================================================


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """In-memory exporter capturing finished spans."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> TracerProvider:
    """Tracer provider exporting synchronously to span_exporter."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider


@pytest.fixture
def otel_tracer(tracer_provider: TracerProvider) -> OpenTelemetryTracer:
    """OpenTelemetryTracer bound to the test provider."""
    return OpenTelemetryTracer("tests", tracer_provider=tracer_provider)


@pytest.fixture
def get_spans(span_exporter: InMemorySpanExporter) -> Callable[[], list[Any]]:
    """
    Helper fixture to retrieve finished spans from the exporter.

    Example:
        >>> def test_spans(get_spans):
        ...     # ... operations that create spans ...
        ...     assert len(get_spans()) == 1
    """

    def _get_spans() -> list[Any]:
        return list(span_exporter.get_finished_spans())

    return _get_spans


# ============================================================================
# Propagation Fixtures
# ============================================================================


@pytest.fixture
def propagator() -> TraceContextTextMapPropagator:
    """W3C trace context propagator."""
    return TraceContextTextMapPropagator()


@pytest.fixture
def producer_span_context() -> SpanContext:
    """Span context of the (remote) span that enqueued the job."""
    return SpanContext(
        trace_id=0x4BF92F3577B34DA6A3CE929D0E0E4736,
        span_id=0x00F067AA0BA902B7,
        is_remote=True,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )


# ============================================================================
# Job Fixtures
# ============================================================================


@pytest.fixture
def job_message() -> dict[str, Any]:
    """Raw job message as a job host would hand it to server middleware."""
    return {
        "class": "HardWorker",
        "jid": "b4a577edbccf1d805744efa9",
        "queue": "default",
        "args": [1, "two"],
        "retry": True,
        "created_at": CREATED_AT,
        "enqueued_at": ENQUEUED_AT,
    }


@pytest.fixture
def traced_message(
    job_message: dict[str, Any],
    producer_span_context: SpanContext,
    propagator: TraceContextTextMapPropagator,
) -> dict[str, Any]:
    """job_message carrying the producer's trace context."""
    ctx = trace.set_span_in_context(NonRecordingSpan(producer_span_context))
    propagator.inject(job_message, context=ctx)
    return job_message


@pytest.fixture
def job_descriptor() -> JobDescriptor:
    """Job descriptor for an enqueued job."""
    return JobDescriptor(
        job_class="SendInvoiceJob",
        queue_name="mailers",
        job_id="4d1c5a36-7d2e-4f55-a0f1-6f0a8f6c33c8",
        adapter_name="sidekiq",
        enqueued_at=datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC),
        executions=1,
    )
