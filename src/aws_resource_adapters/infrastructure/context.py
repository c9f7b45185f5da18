"""Operation context - deadline and cancellation threaded through every lifecycle call."""

import threading
import time
from typing import Any, Callable, Dict, Optional

from aws_resource_adapters.infrastructure.exceptions import OperationCancelledError


class OperationContext:
    """Caller-supplied deadline and cancellation signal for one operation.

    The context is checked before every remote call, between pages and
    between waiter polls. An in-flight boto3 call is not interrupted; the
    operation is abandoned at the next check.
    """

    def __init__(self, deadline: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None,
                 clock: Callable[[], float] = time.monotonic,
                 **additional_context):
        self.deadline = deadline
        self.cancel_event = cancel_event or threading.Event()
        self.clock = clock
        self.additional_context = additional_context

    @classmethod
    def background(cls) -> "OperationContext":
        """A context that never expires and is only cancelled explicitly."""
        return cls()

    @classmethod
    def with_timeout(cls, timeout: Optional[float],
                     clock: Callable[[], float] = time.monotonic, **additional_context) -> "OperationContext":
        """A context expiring ``timeout`` seconds from now (never if ``None``)."""
        deadline = clock() + timeout if timeout is not None else None
        return cls(deadline=deadline, clock=clock, **additional_context)

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self.clock())

    def check(self, operation: str) -> None:
        """Raise OperationCancelledError if the operation must stop."""
        if self.cancelled:
            raise OperationCancelledError(operation, "cancelled")
        if self.deadline is not None and self.clock() >= self.deadline:
            raise OperationCancelledError(operation, "deadline exceeded")

    def sleep(self, seconds: float, operation: str) -> None:
        """Sleep up to ``seconds``, waking early and raising on cancellation."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        if seconds > 0:
            self.cancel_event.wait(seconds)
        self.check(operation)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "deadline": self.deadline,
            "cancelled": self.cancelled,
            **self.additional_context,
        }
