"""
Server middleware for job-processing hosts.

Provides TracerMiddleware, which wraps each job execution in a consumer
span, and its configuration types.
"""

from jobtrace.middleware.config import (
    DEFAULT_MAX_RETRY_ATTEMPTS,
    PropagationStyle,
    SpanNaming,
    TracerMiddlewareConfig,
)
from jobtrace.middleware.server import (
    TracerMiddleware,
    current_retry,
    job_class_name,
    latency_ms,
    max_retries,
    retry_attributes,
    span_name,
)

__all__ = [
    "DEFAULT_MAX_RETRY_ATTEMPTS",
    "PropagationStyle",
    "SpanNaming",
    "TracerMiddleware",
    "TracerMiddlewareConfig",
    "current_retry",
    "job_class_name",
    "latency_ms",
    "max_retries",
    "retry_attributes",
    "span_name",
]
