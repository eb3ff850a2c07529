from __future__ import annotations

"""Deterministic deferred callbacks driven by the simulation clock.

Entries only fire from `TimerQueue.advance`, never from wall-clock time, so a
paused simulation pauses its timers too and replays stay reproducible.
"""

from dataclasses import dataclass, field
import heapq
from typing import Callable, Hashable

__all__ = [
    "TimerHandle",
    "TimerQueue",
]

TimerCallback = Callable[[], None]


@dataclass(slots=True, eq=False)
class TimerHandle:
    due_ms: float
    seq: int
    callback: TimerCallback
    owner: Hashable | None = None
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass(slots=True)
class TimerQueue:
    now_ms: float = 0.0
    _heap: list[tuple[float, int, TimerHandle]] = field(default_factory=list)
    _seq: int = 0

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._heap if handle.pending)

    def schedule(self, delay_ms: float, callback: TimerCallback, *, owner: Hashable | None = None) -> TimerHandle:
        delay = max(0.0, float(delay_ms))
        handle = TimerHandle(due_ms=self.now_ms + delay, seq=self._seq, callback=callback, owner=owner)
        self._seq += 1
        heapq.heappush(self._heap, (handle.due_ms, handle.seq, handle))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancelled = True

    def cancel_owner(self, owner: Hashable) -> int:
        cancelled = 0
        for _, _, handle in self._heap:
            if handle.pending and handle.owner == owner:
                handle.cancelled = True
                cancelled += 1
        return cancelled

    def clear(self) -> None:
        for _, _, handle in self._heap:
            handle.cancelled = True
        self._heap.clear()

    def advance(self, dt_ms: float) -> int:
        """Move time forward and fire every entry due by the new time.

        Callbacks may schedule more entries; those fire in this same call when
        they are already due. Returns the number of callbacks fired.
        """

        target = self.now_ms + max(0.0, float(dt_ms))

        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, handle = heapq.heappop(self._heap)
            if not handle.pending:
                continue
            # Callbacks observe their own due time, so chained delays stay exact.
            self.now_ms = max(self.now_ms, due)
            handle.fired = True
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired
