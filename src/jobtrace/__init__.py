"""
jobtrace - OpenTelemetry instrumentation adapters for background job frameworks.

This library provides:
- AttributeMapper: semantic span attributes for job lifecycle payloads
- TracerMiddleware: server middleware that traces each job execution,
  continuing or linking to the trace that enqueued the job
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jobtrace")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from jobtrace.exceptions import ConfigurationError, JobTraceError, MissingJobError
from jobtrace.jobs import JobDescriptor
from jobtrace.mapper import AttributeMapper
from jobtrace.middleware import (
    PropagationStyle,
    SpanNaming,
    TracerMiddleware,
    TracerMiddlewareConfig,
)
from jobtrace.observability import (
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    SpanKindEnum,
    Tracer,
    create_tracer,
)
from jobtrace.protocols import AttributeSet, JobMessage, ServerMiddleware

__all__ = [
    "__version__",
    # Exceptions
    "JobTraceError",
    "MissingJobError",
    "ConfigurationError",
    # Jobs
    "JobDescriptor",
    "AttributeMapper",
    # Middleware
    "ServerMiddleware",
    "TracerMiddleware",
    "TracerMiddlewareConfig",
    "SpanNaming",
    "PropagationStyle",
    # Tracing
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "SpanKindEnum",
    "create_tracer",
    # Types
    "AttributeSet",
    "JobMessage",
]
