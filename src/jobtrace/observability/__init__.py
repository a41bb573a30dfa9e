"""
Observability utilities for jobtrace.

This module provides the injectable tracer abstraction and the standard
attribute keys shared by the attribute mapper and the tracer middleware.

Example:
    >>> from jobtrace.observability import SpanKindEnum, create_tracer
    >>>
    >>> tracer = create_tracer(__name__)
    >>> with tracer.span_with_kind("default process", kind=SpanKindEnum.CONSUMER):
    ...     pass
"""

from jobtrace.observability.attributes import (
    # General
    ATTR_ACTIVE_JOB_ADAPTER_NAME,
    ATTR_ACTIVE_JOB_PRIORITY,
    ATTR_ACTIVE_JOB_PROVIDER_JOB_ID,
    ATTR_CODE_NAMESPACE,
    # Latency/Retry
    ATTR_LATENCY,
    ATTR_MESSAGE_EXECUTION_COUNT,
    ATTR_MESSAGE_LATENCY,
    # Messaging (OTEL semantic)
    ATTR_MESSAGING_DESTINATION,
    ATTR_MESSAGING_DESTINATION_KIND,
    ATTR_MESSAGING_MESSAGE_ID,
    ATTR_MESSAGING_MESSAGE_ID_DOTTED,
    ATTR_MESSAGING_OPERATION,
    ATTR_MESSAGING_SYSTEM,
    ATTR_PEER_SERVICE,
    ATTR_RETRIES_CURRENT,
    ATTR_RETRIES_EXHAUSTED,
    ATTR_RETRIES_MAXIMUM,
    # Job frameworks
    ATTR_SIDEKIQ_JOB_CLASS,
    DESTINATION_KIND_QUEUE,
    MESSAGING_SYSTEM_ACTIVE_JOB,
    MESSAGING_SYSTEM_SIDEKIQ,
    OPERATION_PROCESS,
)
from jobtrace.observability.tracer import (
    MockSpanRecord,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    SpanKindEnum,
    Tracer,
    create_tracer,
)

__all__ = [
    # Tracer (composition-based API)
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "MockSpanRecord",
    "SpanKindEnum",
    "create_tracer",
    # Attributes - General
    "ATTR_CODE_NAMESPACE",
    "ATTR_PEER_SERVICE",
    # Attributes - Messaging
    "ATTR_MESSAGING_SYSTEM",
    "ATTR_MESSAGING_DESTINATION",
    "ATTR_MESSAGING_DESTINATION_KIND",
    "ATTR_MESSAGING_MESSAGE_ID",
    "ATTR_MESSAGING_MESSAGE_ID_DOTTED",
    "ATTR_MESSAGING_OPERATION",
    # Attributes - Job frameworks
    "ATTR_ACTIVE_JOB_ADAPTER_NAME",
    "ATTR_ACTIVE_JOB_PROVIDER_JOB_ID",
    "ATTR_ACTIVE_JOB_PRIORITY",
    "ATTR_SIDEKIQ_JOB_CLASS",
    # Attributes - Latency/Retry
    "ATTR_MESSAGE_LATENCY",
    "ATTR_MESSAGE_EXECUTION_COUNT",
    "ATTR_LATENCY",
    "ATTR_RETRIES_CURRENT",
    "ATTR_RETRIES_MAXIMUM",
    "ATTR_RETRIES_EXHAUSTED",
    # Attribute values
    "MESSAGING_SYSTEM_ACTIVE_JOB",
    "MESSAGING_SYSTEM_SIDEKIQ",
    "DESTINATION_KIND_QUEUE",
    "OPERATION_PROCESS",
]
