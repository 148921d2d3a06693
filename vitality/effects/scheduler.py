"""
Timer scheduling for the visual projections.

Everything time-based in the engine (sprite commit delays, feedback expiry,
quadrant cross-fades) goes through a `Scheduler`. Timers are plain deadlines
on a clock; `advance` fires the ones that are due. Nothing runs on another
thread, so the embedding loop decides when time moves forward.
"""

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

from vitality.core.logging import log_debug


class Clock(Protocol):
    """Anything that can tell the current time in milliseconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock backed by time.monotonic, in milliseconds."""

    def now(self) -> float:
        return time.monotonic() * 1000


class ManualClock:
    """A clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        """Moves the clock forward and returns the new time."""
        if ms < 0:
            raise ValueError(f"Cannot move a clock backwards ({ms} ms)")
        self._now += ms
        return self._now


@dataclass(eq=False)
class TimerHandle:
    """
    A scheduled callback.

    deadline: absolute time (ms) at which the callback fires.
    label:    free-form name used in logs.
    """

    deadline: float
    callback: Callable[[], None]
    label: str = ""
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def remaining(self, now: float) -> float:
        return max(0.0, self.deadline - now)


@dataclass(order=True)
class _QueueItem:
    deadline: float
    sequence: int
    handle: TimerHandle = field(compare=False)


class Scheduler:
    """
    Deadline queue of cancellable timers.

    Timers due at the same time fire in the order they were scheduled.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock if clock is not None else MonotonicClock()
        self._queue: list[_QueueItem] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self.clock.now()

    def schedule(
        self, delay_ms: float, callback: Callable[[], None], label: str = ""
    ) -> TimerHandle:
        """
        Schedules a callback after a delay.

        Args:
            delay_ms (float):
                Delay from now, in milliseconds.
            callback (Callable[[], None]):
                Function to call once the delay has elapsed.
            label (str):
                Name used in logs.

        Returns:
            TimerHandle:
                Handle that can be passed to `cancel`.

        """
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        handle = TimerHandle(self.now() + delay_ms, callback, label)
        heapq.heappush(self._queue, _QueueItem(handle.deadline, next(self._sequence), handle))
        return handle

    def cancel(self, handle: TimerHandle | None) -> bool:
        """Cancels a timer. Returns False if it had already fired or been cancelled."""
        if handle is None or not handle.pending:
            return False
        handle.cancelled = True
        log_debug(f"Cancelled timer '{handle.label}'", {"deadline": handle.deadline})
        return True

    def advance(self) -> int:
        """
        Fires every timer whose deadline has passed.

        Callbacks may schedule new timers; those fire in the same call if
        they are already due.

        Returns:
            int:
                The number of callbacks fired.

        """
        fired = 0
        while self._queue and self._queue[0].deadline <= self.now():
            handle = heapq.heappop(self._queue).handle
            if not handle.pending:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired

    def pending(self) -> list[TimerHandle]:
        """Returns the timers still waiting to fire, earliest first."""
        return [item.handle for item in sorted(self._queue) if item.handle.pending]

    def next_deadline(self) -> float | None:
        """Returns the earliest pending deadline, if any."""
        for handle in self.pending():
            return handle.deadline
        return None
