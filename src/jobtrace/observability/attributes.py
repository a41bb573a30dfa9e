"""
Standard span attributes for jobtrace.

This module defines the attribute keys written by the job attribute mapper
and the server tracer middleware. Keys follow the OpenTelemetry messaging
semantic conventions where one exists; latency and retry bookkeeping use the
``com.joyful_programming.*`` namespace and job-framework specifics use
``messaging.active_job.*`` / ``messaging.sidekiq.*``.

Example:
    >>> from jobtrace.observability.attributes import (
    ...     ATTR_MESSAGING_DESTINATION,
    ...     ATTR_MESSAGING_SYSTEM,
    ...     MESSAGING_SYSTEM_SIDEKIQ,
    ... )
    >>>
    >>> attributes = {
    ...     ATTR_MESSAGING_SYSTEM: MESSAGING_SYSTEM_SIDEKIQ,
    ...     ATTR_MESSAGING_DESTINATION: "default",
    ... }
"""

# =============================================================================
# General Attributes (OpenTelemetry Semantic Conventions)
# =============================================================================

ATTR_CODE_NAMESPACE = "code.namespace"
"""Namespace of the code unit doing the work (job class name)."""

ATTR_PEER_SERVICE = "peer.service"
"""Logical name of the remote service, when configured."""

# =============================================================================
# Messaging Attributes (OpenTelemetry Semantic Conventions)
# =============================================================================

ATTR_MESSAGING_SYSTEM = "messaging.system"
"""Messaging system identifier (e.g., 'sidekiq', 'active_job')."""

ATTR_MESSAGING_DESTINATION = "messaging.destination"
"""Destination queue name."""

ATTR_MESSAGING_DESTINATION_KIND = "messaging.destination_kind"
"""Kind of destination; always 'queue' for job frameworks."""

ATTR_MESSAGING_MESSAGE_ID = "messaging.message_id"
"""Message identifier as written by the server middleware (the job id)."""

ATTR_MESSAGING_MESSAGE_ID_DOTTED = "messaging.message.id"
"""Message identifier as written by the attribute mapper (the job id)."""

ATTR_MESSAGING_OPERATION = "messaging.operation"
"""Messaging operation type (e.g., 'process')."""

# =============================================================================
# Job Framework Attributes
# =============================================================================

ATTR_ACTIVE_JOB_ADAPTER_NAME = "messaging.active_job.adapter.name"
"""Name of the queue adapter backing the job (string)."""

ATTR_ACTIVE_JOB_PROVIDER_JOB_ID = "messaging.active_job.message.provider_job_id"
"""Backend-assigned job identifier (stringified)."""

ATTR_ACTIVE_JOB_PRIORITY = "messaging.active_job.message.priority"
"""Job priority (stringified, not validated)."""

ATTR_SIDEKIQ_JOB_CLASS = "messaging.sidekiq.job_class"
"""Job class, preferring the wrapped class of adapter-wrapped jobs."""

# =============================================================================
# Latency and Retry Attributes
# =============================================================================

ATTR_MESSAGE_LATENCY = "com.joyful_programming.messaging.message.latency"
"""Milliseconds between enqueue and the lifecycle event (float)."""

ATTR_MESSAGE_EXECUTION_COUNT = "com.joyful_programming.messaging.message.execution_count"
"""Number of times the job has been executed (integer)."""

ATTR_LATENCY = "com.joyful_programming.messaging.latency"
"""Milliseconds between enqueue and the start of processing (float)."""

ATTR_RETRIES_CURRENT = "com.joyful_programming.messaging.message.retries.current"
"""Current retry attempt; 0 for the first execution (integer)."""

ATTR_RETRIES_MAXIMUM = "com.joyful_programming.messaging.message.retries.maximum"
"""Maximum retries allowed for the job (integer)."""

ATTR_RETRIES_EXHAUSTED = "com.joyful_programming.messaging.message.retries.exhausted"
"""Whether the current attempt is at or past the maximum (boolean)."""

# =============================================================================
# Attribute Values
# =============================================================================

MESSAGING_SYSTEM_ACTIVE_JOB = "active_job"
MESSAGING_SYSTEM_SIDEKIQ = "sidekiq"
DESTINATION_KIND_QUEUE = "queue"
OPERATION_PROCESS = "process"
