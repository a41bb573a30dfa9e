"""
Server tracer middleware.

TracerMiddleware wraps each job execution in a CONSUMER span annotated with
messaging semantic attributes, retry bookkeeping and enqueue latency. The
trace context injected by the enqueuing process is extracted from the raw
job message and, depending on the configured PropagationStyle, either
becomes the parent of the job span or is referenced through a span link.

Example:
    >>> from opentelemetry.sdk.trace import TracerProvider
    >>> from jobtrace import TracerMiddleware, TracerMiddlewareConfig, create_tracer
    >>>
    >>> middleware = TracerMiddleware(
    ...     config=TracerMiddlewareConfig(propagation_style="child"),
    ...     tracer=create_tracer(__name__, tracer_provider=TracerProvider()),
    ... )
    >>> middleware(worker, msg, "default", lambda: worker.perform(*msg["args"]))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from opentelemetry import context as otel_context
from opentelemetry import propagate, trace
from opentelemetry.trace import Link, Status, StatusCode

from jobtrace.middleware.config import PropagationStyle, SpanNaming, TracerMiddlewareConfig
from jobtrace.observability.attributes import (
    ATTR_LATENCY,
    ATTR_MESSAGING_DESTINATION,
    ATTR_MESSAGING_DESTINATION_KIND,
    ATTR_MESSAGING_MESSAGE_ID,
    ATTR_MESSAGING_OPERATION,
    ATTR_MESSAGING_SYSTEM,
    ATTR_PEER_SERVICE,
    ATTR_RETRIES_CURRENT,
    ATTR_RETRIES_EXHAUSTED,
    ATTR_RETRIES_MAXIMUM,
    ATTR_SIDEKIQ_JOB_CLASS,
    DESTINATION_KIND_QUEUE,
    MESSAGING_SYSTEM_SIDEKIQ,
    OPERATION_PROCESS,
)
from jobtrace.observability.tracer import SpanKindEnum, Tracer, create_tracer
from jobtrace.protocols import AttributeSet, JobMessage, NextCallable

if TYPE_CHECKING:
    from opentelemetry.context import Context
    from opentelemetry.propagators.textmap import TextMapPropagator
    from opentelemetry.trace import Span

logger = logging.getLogger(__name__)


# =============================================================================
# Attribute helpers
# =============================================================================


def max_retries(msg: JobMessage, default_max: int) -> int:
    """
    Effective maximum number of retries for a job message.

    ``retry: True`` means "use the host default", ``retry: False`` disables
    retries and an integer is a per-job maximum.
    """
    retry = msg.get("retry")
    if retry is True:
        return default_max
    if retry is False:
        return 0
    return retry or 0


def current_retry(msg: JobMessage) -> int:
    """Retry attempt being executed; 0 for the first execution."""
    if "retry_count" in msg:
        return msg["retry_count"] + 1
    return 0


def retry_attributes(msg: JobMessage, default_max: int) -> AttributeSet:
    """Current, maximum and exhausted retry attributes for a job message."""
    maximum = max_retries(msg, default_max)
    current = current_retry(msg)
    return {
        ATTR_RETRIES_CURRENT: current,
        ATTR_RETRIES_MAXIMUM: maximum,
        ATTR_RETRIES_EXHAUSTED: current >= maximum,
    }


def job_class_name(msg: JobMessage) -> Any:
    """Job class, preferring the class wrapped by an adapter job."""
    wrapped = msg.get("wrapped")
    if wrapped is not None:
        return str(wrapped)
    return msg.get("class")


def latency_ms(enqueued_at: float | None, now: float) -> float:
    """Milliseconds elapsed between ``enqueued_at`` and ``now`` (epoch seconds)."""
    return 1000.0 * (now - float(enqueued_at or 0))


def span_name(msg: JobMessage, naming: SpanNaming) -> str:
    """Span name for a job message under the given naming style."""
    if naming is SpanNaming.JOB_CLASS:
        return f"{job_class_name(msg)} process"
    return f"{msg.get('queue')} process"


def _epoch_ns(seconds: float | None) -> int | None:
    if seconds is None:
        return None
    return int(float(seconds) * 1_000_000_000)


# =============================================================================
# Middleware
# =============================================================================


class TracerMiddleware:
    """
    Traces job execution for a job-processing host.

    Implements the ServerMiddleware protocol. One instance can be shared by
    every worker thread of a host: it keeps no per-job state.

    Args:
        config: Middleware options (defaults to TracerMiddlewareConfig())
        tracer: Tracer used to create spans (defaults to an OpenTelemetry
            tracer from the global tracer provider)
        propagator: Propagator used to read trace context from job messages
            (defaults to the globally configured text-map propagator)
        clock: Returns the current UTC time as epoch seconds
    """

    def __init__(
        self,
        config: TracerMiddlewareConfig | None = None,
        tracer: Tracer | None = None,
        propagator: TextMapPropagator | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or TracerMiddlewareConfig()
        self._tracer = tracer or create_tracer(__name__)
        self._propagator = propagator
        self._clock = clock

    @property
    def config(self) -> TracerMiddlewareConfig:
        """The middleware's configuration."""
        return self._config

    def __call__(
        self,
        worker: Any,
        msg: JobMessage,
        queue: str,
        call_next: NextCallable,
    ) -> Any:
        """
        Run ``call_next`` inside a job span.

        Args:
            worker: The job instance (unused, part of the middleware protocol)
            msg: Raw job message
            queue: Queue the job was fetched from (the message's own
                ``queue`` field is what gets reported)
            call_next: Runs the rest of the middleware chain and the job

        Returns:
            The result of ``call_next``

        Raises:
            Any exception raised by ``call_next``, unchanged
        """
        attributes = self.attributes_for(msg)
        name = span_name(msg, self._config.span_naming)
        extracted = self._extract(msg)

        logger.debug(
            "Processing job",
            extra={
                "job_class": attributes.get(ATTR_SIDEKIQ_JOB_CLASS),
                "jid": msg.get("jid"),
                "queue": msg.get("queue"),
                "propagation_style": self._config.propagation_style.value,
            },
        )

        token = otel_context.attach(extracted)
        try:
            if self._config.propagation_style is PropagationStyle.CHILD:
                return self._process_as_child(name, attributes, extracted, msg, call_next)
            return self._process_as_root(name, attributes, extracted, msg, call_next)
        finally:
            otel_context.detach(token)

    def attributes_for(self, msg: JobMessage) -> AttributeSet:
        """
        Span attributes for a job message.

        Entries whose value is missing from the message are left out.
        """
        attributes: dict[str, Any] = {
            ATTR_MESSAGING_SYSTEM: MESSAGING_SYSTEM_SIDEKIQ,
            ATTR_SIDEKIQ_JOB_CLASS: job_class_name(msg),
            ATTR_MESSAGING_MESSAGE_ID: msg.get("jid"),
            ATTR_MESSAGING_DESTINATION: msg.get("queue"),
            ATTR_MESSAGING_DESTINATION_KIND: DESTINATION_KIND_QUEUE,
            ATTR_MESSAGING_OPERATION: OPERATION_PROCESS,
            **retry_attributes(msg, self._config.default_max_retries),
            ATTR_LATENCY: latency_ms(msg.get("enqueued_at"), self._clock()),
        }
        if self._config.peer_service:
            attributes[ATTR_PEER_SERVICE] = self._config.peer_service

        return {key: value for key, value in attributes.items() if value is not None}

    def _extract(self, msg: JobMessage) -> Context:
        propagator = self._propagator or propagate.get_global_textmap()
        # Layered over the current context so host-level values survive
        return propagator.extract(msg, context=otel_context.get_current())

    def _process_as_child(
        self,
        name: str,
        attributes: AttributeSet,
        extracted: Context,
        msg: JobMessage,
        call_next: NextCallable,
    ) -> Any:
        # The span context manager records the exception, sets the error
        # status and ends the span before the exception leaves this block
        with self._tracer.span_with_kind(
            name,
            kind=SpanKindEnum.CONSUMER,
            attributes=attributes,
            context=extracted,
        ) as span:
            self._add_timestamp_events(span, msg)
            return call_next()

    def _process_as_root(
        self,
        name: str,
        attributes: AttributeSet,
        extracted: Context,
        msg: JobMessage,
        call_next: NextCallable,
    ) -> Any:
        links: list[Link] = []
        if self._config.propagation_style is PropagationStyle.LINK:
            span_context = trace.get_current_span(extracted).get_span_context()
            if span_context.is_valid:
                links.append(Link(span_context))

        span = self._tracer.start_span(
            name,
            kind=SpanKindEnum.CONSUMER,
            attributes=attributes,
            context=otel_context.Context(),
            links=links,
        )
        if span is None:
            return call_next()

        try:
            with trace.use_span(
                span,
                end_on_exit=False,
                record_exception=False,
                set_status_on_exception=False,
            ):
                self._add_timestamp_events(span, msg)
                return call_next()
        except BaseException as exc:
            span.record_exception(exc)
            span.set_status(
                Status(StatusCode.ERROR, f"Unhandled exception of type: {type(exc).__name__}")
            )
            logger.debug(
                "Job raised, exception recorded on span",
                extra={"span_name": name, "error_type": type(exc).__name__},
            )
            raise
        finally:
            span.end()

    def _add_timestamp_events(self, span: Span | None, msg: JobMessage) -> None:
        if span is None:
            return
        span.add_event("created_at", timestamp=_epoch_ns(msg.get("created_at")))
        span.add_event("enqueued_at", timestamp=_epoch_ns(msg.get("enqueued_at")))


__all__ = [
    "TracerMiddleware",
    "current_retry",
    "job_class_name",
    "latency_ms",
    "max_retries",
    "retry_attributes",
    "span_name",
]
