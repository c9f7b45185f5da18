"""Tests for the convergence waiter."""

import itertools

import pytest

from aws_resource_adapters.domain.core.exceptions import ResourceNotFoundError
from aws_resource_adapters.infrastructure.context import OperationContext
from aws_resource_adapters.infrastructure.exceptions import (
    OperationCancelledError,
    UnexpectedStateError,
    WaitTimeoutError,
)
from aws_resource_adapters.infrastructure.waiters import StateChangeWaiter


def scripted(*results):
    """Refresh function replaying ``results`` in order."""
    replay = iter(results)
    calls = []

    def refresh():
        result = next(replay)
        calls.append(result)
        return result
    refresh.calls = calls
    return refresh


def make_waiter(refresh, **kwargs):
    params = dict(
        pending=['CREATING'],
        target=['ACTIVE'],
        refresh=refresh,
        timeout=60,
        poll_interval=1,
        sleep=lambda seconds: None,
    )
    params.update(kwargs)
    return StateChangeWaiter(**params)


@pytest.mark.unit
class TestStateChangeWaiter:

    def test_returns_object_on_target(self):
        obj = {'Status': 'ACTIVE'}
        refresh = scripted(({'Status': 'CREATING'}, 'CREATING'), (obj, 'ACTIVE'))

        assert make_waiter(refresh).wait() is obj
        assert len(refresh.calls) == 2

    def test_continuous_target_occurrence(self):
        refresh = scripted(
            ('o', 'ACTIVE'), ('o', 'CREATING'), ('o', 'ACTIVE'), ('o', 'ACTIVE'),
        )
        make_waiter(refresh, continuous_target_occurrence=2).wait()
        assert len(refresh.calls) == 4

    def test_unexpected_state(self):
        refresh = scripted(('o', 'FAILED'))
        with pytest.raises(UnexpectedStateError) as exc_info:
            make_waiter(refresh).wait()
        assert exc_info.value.status == 'FAILED'

    def test_timeout(self):
        ticks = itertools.count(step=10)
        refresh = scripted(*[('o', 'CREATING')] * 20)

        with pytest.raises(WaitTimeoutError) as exc_info:
            make_waiter(refresh, timeout=30, clock=lambda: next(ticks)).wait()
        assert exc_info.value.last_status == 'CREATING'

    def test_not_found_budget(self):
        refresh = scripted(*[(None, '')] * 4)
        with pytest.raises(ResourceNotFoundError):
            make_waiter(refresh, not_found_checks=2, resource_id='w').wait()
        assert len(refresh.calls) == 3

    def test_not_found_then_found(self):
        refresh = scripted((None, ''), (None, ''), ('o', 'ACTIVE'))
        assert make_waiter(refresh, not_found_checks=2).wait() == 'o'

    def test_empty_target_waits_until_gone(self):
        refresh = scripted(('o', 'DELETING'), (None, ''))
        assert make_waiter(refresh, pending=['DELETING'], target=[]).wait() is None

    def test_initial_delay(self):
        sleeps = []
        refresh = scripted(('o', 'ACTIVE'))
        make_waiter(refresh, delay=3, sleep=sleeps.append).wait()
        assert sleeps == [3]

    def test_cancellation_between_polls(self):
        context = OperationContext.background()

        def refresh():
            context.cancel()
            return 'o', 'CREATING'

        with pytest.raises(OperationCancelledError):
            make_waiter(refresh).wait(context)

    def test_invalid_occurrence(self):
        with pytest.raises(ValueError):
            make_waiter(scripted(), continuous_target_occurrence=0)
