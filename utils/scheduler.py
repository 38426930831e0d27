"""
Single-threaded timer queue for the editor.

Streamlit has no event loop we can hand timers to, so deadlines are kept here and
drained by whoever owns the UI thread (`run_due`). Worker threads may only use
`call_soon`, which is the one thread-safe entry point.
"""

import heapq
import itertools
import threading
import time
from typing import Any, Callable, Optional


class TimerHandle:
    def __init__(self, deadline: float, seq: int, callback: Callable, args: tuple):
        self.deadline = deadline
        self.seq = seq
        self._callback = callback
        self._args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def _run(self) -> None:
        if not self.cancelled:
            self._callback(*self._args)

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.deadline, self.seq) < (other.deadline, other.seq)


class TimerQueue:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._heap: list[TimerHandle] = []
        self._ready: list[TimerHandle] = []
        self._lock = threading.Lock()
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable, *args: Any) -> TimerHandle:
        handle = TimerHandle(self._clock() + max(delay, 0.0), next(self._seq), callback, args)
        with self._lock:
            heapq.heappush(self._heap, handle)
        return handle

    def call_soon(self, callback: Callable, *args: Any) -> TimerHandle:
        """Queue a callback for the next drain. Safe to call from any thread."""
        handle = TimerHandle(0.0, next(self._seq), callback, args)
        with self._lock:
            self._ready.append(handle)
        return handle

    def run_due(self, now: Optional[float] = None) -> int:
        """Run every queued callback and every timer whose deadline has passed."""
        now = self._clock() if now is None else now
        with self._lock:
            due = self._ready
            self._ready = []
            while self._heap and self._heap[0].deadline <= now:
                due.append(heapq.heappop(self._heap))

        ran = 0
        for handle in due:
            if handle.cancelled:
                continue
            handle._run()
            ran += 1
        return ran

    def pending(self) -> int:
        with self._lock:
            return sum(1 for h in self._heap + self._ready if not h.cancelled)

    def clear(self) -> None:
        with self._lock:
            for handle in self._heap + self._ready:
                handle.cancel()
            self._heap = []
            self._ready = []
