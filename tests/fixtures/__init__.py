"""
Shared test data for jobtrace tests.

Timestamps are epoch seconds, as job hosts store them in job messages.
"""

ENQUEUED_AT = 1_700_000_000.0
"""Epoch seconds for 2023-11-14T22:13:20Z."""

CREATED_AT = 1_699_999_999.5
"""Half a second before ENQUEUED_AT."""

NOW = 1_700_000_100.0
"""Frozen clock value, 100 seconds after ENQUEUED_AT."""

__all__ = ["CREATED_AT", "ENQUEUED_AT", "NOW"]
