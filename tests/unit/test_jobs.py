"""Tests for jobtrace.jobs.JobDescriptor."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from jobtrace import JobDescriptor


def _descriptor(**overrides) -> JobDescriptor:
    fields = {
        "job_class": "ReportJob",
        "queue_name": "reports",
        "job_id": "abc",
        "adapter_name": "sidekiq",
    }
    fields.update(overrides)
    return JobDescriptor(**fields)


class TestJobDescriptor:
    """Tests for JobDescriptor parsing and immutability."""

    def test_optional_fields_default_to_none(self):
        """Optional fields are None and executions is 0 by default."""
        job = _descriptor()
        assert job.provider_job_id is None
        assert job.priority is None
        assert job.enqueued_at is None
        assert job.executions == 0

    def test_is_frozen(self):
        """Descriptors cannot be mutated."""
        job = _descriptor()
        with pytest.raises(ValidationError):
            job.queue_name = "other"

    def test_required_fields(self):
        """Missing required fields fail validation."""
        with pytest.raises(ValidationError):
            JobDescriptor(job_class="ReportJob")

    def test_epoch_seconds_enqueued_at(self):
        """Epoch seconds are parsed into an aware UTC datetime."""
        job = _descriptor(enqueued_at=1_700_000_000)
        assert job.enqueued_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)

    def test_naive_datetime_assumed_utc(self):
        """Naive datetimes are treated as UTC."""
        job = _descriptor(enqueued_at=datetime(2023, 11, 14, 22, 13, 20))
        assert job.enqueued_at is not None
        assert job.enqueued_at.tzinfo is UTC
        assert job.enqueued_at.timestamp() == 1_700_000_000

    def test_negative_executions_rejected(self):
        """Execution counts cannot be negative."""
        with pytest.raises(ValidationError):
            _descriptor(executions=-1)

    def test_priority_accepts_any_value(self):
        """Priority is stored without validation."""
        assert _descriptor(priority="urgent").priority == "urgent"
        assert _descriptor(priority=5).priority == 5
