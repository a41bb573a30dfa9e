"""
Job lifecycle attribute mapper.

Maps job lifecycle payloads onto general and messaging semantic convention
attributes, using the ``messaging.active_job.*`` namespace for values that
have no standard key.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from jobtrace.exceptions import MissingJobError
from jobtrace.jobs import JobDescriptor
from jobtrace.observability.attributes import (
    ATTR_ACTIVE_JOB_ADAPTER_NAME,
    ATTR_ACTIVE_JOB_PRIORITY,
    ATTR_ACTIVE_JOB_PROVIDER_JOB_ID,
    ATTR_CODE_NAMESPACE,
    ATTR_MESSAGE_EXECUTION_COUNT,
    ATTR_MESSAGE_LATENCY,
    ATTR_MESSAGING_DESTINATION,
    ATTR_MESSAGING_MESSAGE_ID_DOTTED,
    ATTR_MESSAGING_SYSTEM,
    MESSAGING_SYSTEM_ACTIVE_JOB,
)
from jobtrace.protocols import AttributeSet


def _compact(attributes: dict[str, Any]) -> AttributeSet:
    return {key: value for key, value in attributes.items() if value is not None}


def _fetch_job(payload: Mapping[str, Any]) -> JobDescriptor:
    try:
        job = payload["job"]
    except KeyError:
        raise MissingJobError("job") from None
    if isinstance(job, Mapping):
        return JobDescriptor.model_validate(job)
    return job


class AttributeMapper:
    """
    Generates span attributes for job lifecycle payloads.

    Args:
        clock: Returns the current time as epoch seconds (defaults to time.time)

    Example:
        >>> mapper = AttributeMapper()
        >>> attributes = mapper.start({"job": job})
        >>> attributes["messaging.destination"]
        'mailers'
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def __call__(self, payload: Mapping[str, Any]) -> AttributeSet:
        """
        Map an enqueue or perform payload to attributes.

        Args:
            payload: Lifecycle payload holding a JobDescriptor (or a mapping
                of its fields) under "job"

        Returns:
            Attribute mapping without any None values

        Raises:
            MissingJobError: If the payload has no "job" entry
        """
        job = _fetch_job(payload)

        attributes: dict[str, Any] = {
            ATTR_CODE_NAMESPACE: job.job_class,
            ATTR_MESSAGING_SYSTEM: MESSAGING_SYSTEM_ACTIVE_JOB,
            ATTR_MESSAGING_DESTINATION: job.queue_name,
            ATTR_MESSAGING_MESSAGE_ID_DOTTED: job.job_id,
            ATTR_ACTIVE_JOB_ADAPTER_NAME: job.adapter_name,
        }

        if job.enqueued_at is not None:
            attributes[ATTR_MESSAGE_LATENCY] = self._latency_of(job.enqueued_at)

        # Not all adapters generate or provide back end specific ids
        if job.provider_job_id is not None:
            attributes[ATTR_ACTIVE_JOB_PROVIDER_JOB_ID] = str(job.provider_job_id)
        if job.priority is not None:
            attributes[ATTR_ACTIVE_JOB_PRIORITY] = str(job.priority)

        return _compact(attributes)

    def start(self, payload: Mapping[str, Any]) -> AttributeSet:
        """Attributes for the start of an enqueue or perform."""
        return self(payload)

    def record(self, payload: Mapping[str, Any]) -> AttributeSet:
        """Attributes recorded once an enqueue has completed."""
        return self(payload)

    def finish(self, payload: Mapping[str, Any]) -> AttributeSet:
        """
        Map a perform-finished payload to attributes.

        Only the execution count is reported here; everything else was
        already set when the span started.

        Raises:
            MissingJobError: If the payload has no "job" entry
        """
        job = _fetch_job(payload)
        return _compact({ATTR_MESSAGE_EXECUTION_COUNT: job.executions})

    def _latency_of(self, enqueued_at: datetime) -> float:
        return 1000 * (self._clock() - enqueued_at.timestamp())


__all__ = ["AttributeMapper"]
