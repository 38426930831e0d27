import threading

from utils.scheduler import TimerQueue


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def test_call_later_runs_only_after_deadline():
    clock = FakeClock()
    timers = TimerQueue(clock)
    calls = []
    timers.call_later(5, calls.append, "fired")

    clock.advance(4.9)
    assert timers.run_due() == 0
    assert calls == []

    clock.advance(0.1)
    assert timers.run_due() == 1
    assert calls == ["fired"]
    assert timers.pending() == 0


def test_timers_run_in_deadline_order_then_insertion_order():
    clock = FakeClock()
    timers = TimerQueue(clock)
    order = []
    timers.call_later(2, order.append, "b")
    timers.call_later(1, order.append, "a")
    timers.call_later(2, order.append, "c")

    clock.advance(10)
    timers.run_due()
    assert order == ["a", "b", "c"]


def test_cancelled_timer_never_runs():
    clock = FakeClock()
    timers = TimerQueue(clock)
    calls = []
    handle = timers.call_later(1, calls.append, 1)
    handle.cancel()

    assert timers.pending() == 0
    clock.advance(5)
    assert timers.run_due() == 0
    assert calls == []


def test_call_soon_runs_on_next_drain_regardless_of_clock():
    timers = TimerQueue(FakeClock())
    calls = []
    timers.call_soon(calls.append, "x")
    assert timers.run_due() == 1
    assert calls == ["x"]


def test_call_soon_from_worker_thread():
    timers = TimerQueue(FakeClock())
    calls = []
    worker = threading.Thread(target=timers.call_soon, args=(calls.append, "from-thread"))
    worker.start()
    worker.join()

    assert timers.pending() == 1
    timers.run_due()
    assert calls == ["from-thread"]


def test_callback_scheduling_another_timer_waits_for_next_drain():
    clock = FakeClock()
    timers = TimerQueue(clock)
    calls = []

    def first():
        calls.append("first")
        timers.call_later(0, calls.append, "second")

    timers.call_later(0, first)
    timers.run_due()
    assert calls == ["first"]
    timers.run_due()
    assert calls == ["first", "second"]


def test_clear_cancels_everything():
    clock = FakeClock()
    timers = TimerQueue(clock)
    calls = []
    timers.call_later(1, calls.append, 1)
    timers.call_soon(calls.append, 2)
    timers.clear()

    clock.advance(5)
    assert timers.run_due() == 0
    assert calls == []
