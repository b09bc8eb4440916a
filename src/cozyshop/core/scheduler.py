"""Virtual-time scheduler for deferred simulation callbacks."""
from __future__ import annotations

import heapq
from typing import Any, Callable, List, Protocol, Tuple


class TimerHandle:
    """Cancellable reference to a scheduled callback."""

    __slots__ = ("time", "_callback", "_args", "_cancelled", "_fired")

    def __init__(self, time: float, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self.time = time
        self._callback = callback
        self._args = args
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        """Cancel the callback. No-op once fired or already cancelled."""
        if self._fired:
            return
        self._cancelled = True

    def _fire(self) -> None:
        self._fired = True
        self._callback(*self._args)


class Scheduler(Protocol):
    """Capability the simulation needs from a clock."""

    @property
    def now(self) -> float: ...

    def after(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class VirtualScheduler:
    """Priority queue of timed callbacks driven by explicit time advancement.

    Callbacks fire in non-decreasing time order; callbacks scheduled for the
    same instant fire in the order they were scheduled.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = float(start_time)
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._seq = 0

    @property
    def now(self) -> float:
        return self._now

    def after(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Schedule callback(*args) to run delay seconds from now."""
        if delay < 0:
            raise ValueError(f"Delay must be zero or higher (got {delay}).")
        handle = TimerHandle(self._now + delay, callback, args)
        self._seq += 1
        heapq.heappush(self._heap, (handle.time, self._seq, handle))
        return handle

    @staticmethod
    def cancel(handle: TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()

    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._heap if handle.pending)

    def peek_time(self) -> float:
        self._discard_cancelled()
        return self._heap[0][0] if self._heap else float("inf")

    def run_until(self, time: float) -> int:
        """Fire every callback due at or before time, then move the clock to time."""
        fired = 0
        while True:
            self._discard_cancelled()
            if not self._heap or self._heap[0][0] > time:
                break
            event_time, _, handle = heapq.heappop(self._heap)
            self._now = max(self._now, event_time)
            handle._fire()
            fired += 1
        self._now = max(self._now, time)
        return fired

    def advance(self, seconds: float) -> int:
        if seconds < 0:
            raise ValueError("Cannot advance the clock backwards.")
        return self.run_until(self._now + seconds)

    def run_all(self, max_events: int = 100_000) -> int:
        """Drain the queue. max_events guards against self-rescheduling loops."""
        fired = 0
        while fired < max_events:
            self._discard_cancelled()
            if not self._heap:
                break
            event_time, _, handle = heapq.heappop(self._heap)
            self._now = max(self._now, event_time)
            handle._fire()
            fired += 1
        return fired

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)
