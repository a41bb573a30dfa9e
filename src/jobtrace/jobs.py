"""
Job descriptor model.

A JobDescriptor is the explicit view of a job that the host framework's
adapter hands to the instrumentation. It replaces introspection of the job
object itself: whatever the host knows about a job is copied onto the
descriptor at the adapter boundary.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobDescriptor(BaseModel):
    """
    Read-only description of a unit of work.

    Attributes:
        job_class: Class or type name of the job
        queue_name: Name of the queue the job is destined for
        job_id: Unique identifier of the job
        adapter_name: Name of the queue adapter/backend
        provider_job_id: Identifier assigned by the backend, if any
        priority: Job priority as given by the application, if any
        enqueued_at: When the job was enqueued, if known
        executions: Number of times the job has been executed

    Example:
        >>> job = JobDescriptor(
        ...     job_class="SendInvoiceJob",
        ...     queue_name="mailers",
        ...     job_id="4d1c5a36-7d2e-4f55-a0f1-6f0a8f6c33c8",
        ...     adapter_name="sidekiq",
        ...     enqueued_at="2024-05-01T12:00:00Z",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    job_class: str = Field(..., description="Class or type name of the job")
    queue_name: str = Field(..., description="Destination queue")
    job_id: str = Field(..., description="Unique job identifier")
    adapter_name: str = Field(..., description="Queue adapter name")
    provider_job_id: Any = Field(
        default=None,
        description="Backend-assigned identifier; not every adapter provides one",
    )
    # Left untyped: applications pass integers, strings and symbol-like values
    priority: Any = Field(default=None, description="Job priority")
    enqueued_at: datetime | None = Field(
        default=None,
        description="Enqueue time (ISO-8601 string, epoch seconds or datetime)",
    )
    executions: int = Field(default=0, ge=0, description="Execution count")

    @field_validator("enqueued_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
