"""
Tests for the deadline scheduler and the manual clock.
"""

import pytest
from vitality.effects.scheduler import ManualClock, Scheduler


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


def test_timer_fires_only_once_due(clock, scheduler):
    fired = []
    scheduler.schedule(100, lambda: fired.append("a"))
    clock.advance(99)
    assert scheduler.advance() == 0
    clock.advance(1)
    assert scheduler.advance() == 1
    assert fired == ["a"]
    clock.advance(1000)
    assert scheduler.advance() == 0


def test_timers_fire_in_deadline_then_insertion_order(clock, scheduler):
    fired = []
    scheduler.schedule(50, lambda: fired.append("late"))
    scheduler.schedule(10, lambda: fired.append("first"))
    scheduler.schedule(10, lambda: fired.append("second"))
    clock.advance(100)
    scheduler.advance()
    assert fired == ["first", "second", "late"]


def test_cancelled_timer_does_not_fire(clock, scheduler):
    fired = []
    handle = scheduler.schedule(10, lambda: fired.append("x"))
    assert scheduler.cancel(handle)
    assert not scheduler.cancel(handle)
    clock.advance(20)
    assert scheduler.advance() == 0
    assert fired == []
    assert not handle.pending


def test_cancel_none_is_a_no_op(scheduler):
    assert scheduler.cancel(None) is False


def test_callbacks_can_schedule_due_timers(clock, scheduler):
    fired = []

    def chain():
        fired.append("outer")
        scheduler.schedule(0, lambda: fired.append("inner"))

    scheduler.schedule(5, chain)
    clock.advance(5)
    assert scheduler.advance() == 2
    assert fired == ["outer", "inner"]


def test_pending_and_next_deadline(clock, scheduler):
    assert scheduler.next_deadline() is None
    late = scheduler.schedule(30, lambda: None)
    early = scheduler.schedule(10, lambda: None)
    assert scheduler.pending() == [early, late]
    assert scheduler.next_deadline() == 10
    scheduler.cancel(early)
    assert scheduler.next_deadline() == 30
    assert late.remaining(clock.now()) == 30


def test_negative_values_are_rejected(clock, scheduler):
    with pytest.raises(ValueError):
        scheduler.schedule(-1, lambda: None)
    with pytest.raises(ValueError):
        clock.advance(-5)
