"""Convergence waiters - poll a refresh function until a target status is reached.

Waiting is optional per resource type. A definition attaches a ``WaiterSpec``
for the lifecycle steps that need one; resources whose API is consistent on
return attach none.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from aws_resource_adapters.domain.core.exceptions import ResourceNotFoundError
from aws_resource_adapters.infrastructure.context import OperationContext
from aws_resource_adapters.infrastructure.exceptions import (
    UnexpectedStateError,
    WaitTimeoutError,
)

logger = logging.getLogger(__name__)

# (object, status); (None, "") means the resource was not found.
RefreshResult = Tuple[Optional[Any], str]


class StateChangeWaiter:
    """Poll ``refresh`` until its status has been in ``target`` long enough."""

    def __init__(self, pending: Sequence[str], target: Sequence[str],
                 refresh: Callable[[], RefreshResult],
                 timeout: float,
                 delay: float = 0.0,
                 poll_interval: float = 5.0,
                 not_found_checks: int = 20,
                 continuous_target_occurrence: int = 1,
                 resource_type: str = "resource",
                 resource_id: str = "",
                 sleep: Optional[Callable[[float], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        if continuous_target_occurrence < 1:
            raise ValueError("continuous_target_occurrence must be at least 1")
        self.pending = list(pending)
        self.target = list(target)
        self.refresh = refresh
        self.timeout = timeout
        self.delay = delay
        self.poll_interval = poll_interval
        self.not_found_checks = not_found_checks
        self.continuous_target_occurrence = continuous_target_occurrence
        self.resource_type = resource_type
        self.resource_id = resource_id
        self._sleep = sleep
        self._clock = clock

    def _pause(self, seconds: float, context: OperationContext) -> None:
        if self._sleep is not None:
            context.check("wait")
            self._sleep(seconds)
            context.check("wait")
        else:
            context.sleep(seconds, "wait")

    def wait(self, context: Optional[OperationContext] = None) -> Optional[Any]:
        """
        Block until convergence.

        Returns:
            The last refreshed object (None when waiting for deletion)

        Raises:
            WaitTimeoutError: If the timeout elapses first
            UnexpectedStateError: If a status is neither pending nor target
            ResourceNotFoundError: If the object stays missing past the not-found budget
            OperationCancelledError: If the context is cancelled
        """
        context = context or OperationContext.background()
        started = self._clock()
        last_status = ""
        target_occurrence = 0
        not_found = 0

        if self.delay > 0:
            self._pause(self.delay, context)

        while True:
            context.check("wait")
            obj, status = self.refresh()

            if obj is None:
                if not self.target:
                    logger.debug("%s (%s) is gone", self.resource_type, self.resource_id)
                    return None
                not_found += 1
                target_occurrence = 0
                if not_found > self.not_found_checks:
                    raise ResourceNotFoundError(self.resource_type, self.resource_id)
            else:
                not_found = 0
                last_status = status
                if status in self.target:
                    target_occurrence += 1
                    if target_occurrence >= self.continuous_target_occurrence:
                        return obj
                elif status in self.pending:
                    target_occurrence = 0
                else:
                    raise UnexpectedStateError(status, self.pending + self.target)

            if self._clock() - started >= self.timeout:
                raise WaitTimeoutError(self.timeout, last_status, self.target)

            logger.debug(
                "Waiting for %s (%s): status=%r, target=%r",
                self.resource_type, self.resource_id, last_status, self.target,
            )
            self._pause(self.poll_interval, context)


@dataclass(frozen=True)
class WaiterSpec:
    """Waiter settings for one lifecycle step of a resource type."""
    pending: List[str] = field(default_factory=list)
    target: List[str] = field(default_factory=list)
    status_of: Callable[[Dict[str, Any]], str] = lambda remote: str(remote.get("Status", ""))
    poll_interval: float = 5.0
    delay: float = 0.0
    not_found_checks: int = 20
    continuous_target_occurrence: int = 1


@dataclass(frozen=True)
class ResourceWaiters:
    """Optional waiters per lifecycle step."""
    create: Optional[WaiterSpec] = None
    update: Optional[WaiterSpec] = None
    delete: Optional[WaiterSpec] = None
