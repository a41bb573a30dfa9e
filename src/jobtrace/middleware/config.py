"""
Configuration classes for the server tracer middleware.

This module provides:
- TracerMiddlewareConfig: Options for TracerMiddleware
- SpanNaming: Enum for how job spans are named
- PropagationStyle: Enum for how extracted trace context is used
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from jobtrace.exceptions import ConfigurationError

DEFAULT_MAX_RETRY_ATTEMPTS = 25


class SpanNaming(Enum):
    """
    Source of the span name.

    Attributes:
        QUEUE: "<queue> process" (default)
        JOB_CLASS: "<job class> process"
    """

    QUEUE = "queue"
    JOB_CLASS = "job_class"


class PropagationStyle(Enum):
    """
    How the trace context carried by a job message is used.

    Attributes:
        LINK: Start a new root span linked to the enqueuing span (default)
        CHILD: Continue the enqueuing trace with a child span
        NONE: Start a new root span with no reference to the enqueuing span
    """

    LINK = "link"
    CHILD = "child"
    NONE = "none"


def _coerce(option: str, enum_type: type[Enum], value: Any) -> Any:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in enum_type)
        raise ConfigurationError(
            option,
            value,
            f"Invalid value for option {option!r}: {value!r}. Expected one of {allowed}",
        ) from None


@dataclass(frozen=True)
class TracerMiddlewareConfig:
    """
    Configuration for TracerMiddleware.

    Treated as immutable for the lifetime of the middleware; build a new
    middleware to change options.

    Attributes:
        peer_service: Adds a ``peer.service`` attribute when set
        span_naming: Whether spans are named after the queue or the job class
        propagation_style: Whether the job span continues, links to, or
            ignores the trace context carried by the message
        default_max_retries: The host's global retry maximum, used for
            messages whose ``retry`` flag is ``True``

    Example:
        >>> config = TracerMiddlewareConfig(
        ...     peer_service="billing",
        ...     span_naming="job_class",
        ...     propagation_style="child",
        ... )
        >>> config.span_naming
        <SpanNaming.JOB_CLASS: 'job_class'>
    """

    peer_service: str | None = None
    span_naming: SpanNaming = SpanNaming.QUEUE
    propagation_style: PropagationStyle = PropagationStyle.LINK
    default_max_retries: int = DEFAULT_MAX_RETRY_ATTEMPTS

    def __post_init__(self) -> None:
        """Validate configuration values, accepting enum values as strings."""
        # frozen dataclass: bypass __setattr__ to store the coerced enums
        object.__setattr__(
            self, "span_naming", _coerce("span_naming", SpanNaming, self.span_naming)
        )
        object.__setattr__(
            self,
            "propagation_style",
            _coerce("propagation_style", PropagationStyle, self.propagation_style),
        )

        if self.peer_service is not None and not isinstance(self.peer_service, str):
            raise ConfigurationError("peer_service", self.peer_service)

        if (
            isinstance(self.default_max_retries, bool)
            or not isinstance(self.default_max_retries, int)
            or self.default_max_retries < 0
        ):
            raise ConfigurationError(
                "default_max_retries",
                self.default_max_retries,
                f"default_max_retries must be a non-negative integer, "
                f"got {self.default_max_retries!r}",
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> TracerMiddlewareConfig:
        """
        Build a configuration from a plain options mapping.

        Args:
            options: Option names mapped to values

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If an option is unknown or has an invalid value
        """
        known = {f.name for f in fields(cls)}
        for name in options:
            if name not in known:
                raise ConfigurationError(name, options[name], f"Unknown option: {name!r}")
        return cls(**options)
