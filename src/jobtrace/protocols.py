"""
Canonical protocol definitions for the jobtrace library.

Protocols:
- ServerMiddleware: Hook a job-processing host calls around each job execution

Type aliases:
- AttributeSet: Flat mapping of span attribute keys to scalar values
- JobMessage: Raw job message as stored by the host framework
- NextCallable: Zero-argument callable that runs the rest of the chain

A host integrates by calling every configured ServerMiddleware in order,
each receiving a ``call_next`` that invokes the next one and finally the
job itself. Middlewares are chosen when the host's chain is composed; no
middleware probes for the host at import time.

Example:
    >>> def run(middlewares, worker, msg, queue, perform):
    ...     def link(index):
    ...         if index == len(middlewares):
    ...             return perform
    ...         return lambda: middlewares[index](worker, msg, queue, link(index + 1))
    ...     return link(0)()
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

AttributeSet: TypeAlias = dict[str, str | bool | int | float]
JobMessage: TypeAlias = Mapping[str, Any]
NextCallable: TypeAlias = Callable[[], Any]


@runtime_checkable
class ServerMiddleware(Protocol):
    """
    Protocol for server-side job middlewares.

    Implementations must call ``call_next`` exactly once and return its
    result, letting any exception it raises reach the host.
    """

    def __call__(
        self,
        worker: Any,
        msg: JobMessage,
        queue: str,
        call_next: NextCallable,
    ) -> Any:
        """
        Run around a single job execution.

        Args:
            worker: The job instance the host is about to perform
            msg: Raw job message
            queue: Name of the queue the job was fetched from
            call_next: Runs the remaining middlewares and the job

        Returns:
            Whatever ``call_next`` returned
        """
        ...
