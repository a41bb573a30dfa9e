"""Library exceptions for the jobtrace package."""

from typing import Any


class JobTraceError(Exception):
    """Base exception for jobtrace library."""

    pass


class MissingJobError(JobTraceError, KeyError):
    """Raised when a lifecycle payload carries no job descriptor."""

    def __init__(self, key: str = "job") -> None:
        self.key = key
        super().__init__(f"Lifecycle payload is missing required key: {key!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ConfigurationError(JobTraceError, ValueError):
    """Raised when an instrumentation option has an unsupported value."""

    def __init__(self, option: str, value: Any, message: str | None = None) -> None:
        self.option = option
        self.value = value
        super().__init__(message or f"Invalid value for option {option!r}: {value!r}")
