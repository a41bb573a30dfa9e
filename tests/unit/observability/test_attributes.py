"""Tests for jobtrace.observability.attributes module."""

from jobtrace.observability import attributes
from jobtrace.observability.attributes import (
    ATTR_ACTIVE_JOB_ADAPTER_NAME,
    ATTR_ACTIVE_JOB_PRIORITY,
    ATTR_ACTIVE_JOB_PROVIDER_JOB_ID,
    ATTR_LATENCY,
    ATTR_MESSAGE_EXECUTION_COUNT,
    ATTR_MESSAGE_LATENCY,
    ATTR_RETRIES_CURRENT,
    ATTR_RETRIES_EXHAUSTED,
    ATTR_RETRIES_MAXIMUM,
    ATTR_SIDEKIQ_JOB_CLASS,
)


class TestAttributeConstants:
    """Tests for attribute constant definitions."""

    def test_active_job_attributes_namespaced(self):
        """ActiveJob-specific attributes use the messaging.active_job prefix."""
        for key in (
            ATTR_ACTIVE_JOB_ADAPTER_NAME,
            ATTR_ACTIVE_JOB_PRIORITY,
            ATTR_ACTIVE_JOB_PROVIDER_JOB_ID,
        ):
            assert key.startswith("messaging.active_job.")

    def test_sidekiq_attributes_namespaced(self):
        """Sidekiq-specific attributes use the messaging.sidekiq prefix."""
        assert ATTR_SIDEKIQ_JOB_CLASS.startswith("messaging.sidekiq.")

    def test_custom_attributes_namespaced(self):
        """Latency and retry attributes use the custom namespace."""
        for key in (
            ATTR_LATENCY,
            ATTR_MESSAGE_LATENCY,
            ATTR_MESSAGE_EXECUTION_COUNT,
            ATTR_RETRIES_CURRENT,
            ATTR_RETRIES_MAXIMUM,
            ATTR_RETRIES_EXHAUSTED,
        ):
            assert key.startswith("com.joyful_programming.messaging.")

    def test_attribute_keys_unique(self):
        """No two ATTR_ constants share a key."""
        keys = [value for name, value in vars(attributes).items() if name.startswith("ATTR_")]
        assert len(keys) == len(set(keys))
