"""
Unit tests for clipqueue/utils/debounce.py.

Most tests drive the Debouncer with FakeLoop, a millisecond virtual clock
that fires call_later callbacks in (due time, scheduling order).
"""

import asyncio

import pytest
from clipqueue.utils.debounce import Debouncer, debounce


class FakeTimer:
    def __init__(self, when, seq, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Stand-in for the asyncio loop methods Debouncer uses."""

    def __init__(self):
        self.now_ms = 0.0
        self._timers = []
        self._seq = 0

    def time(self):
        return self.now_ms / 1000

    def call_later(self, delay, callback):
        self._seq += 1
        timer = FakeTimer(self.now_ms + round(delay * 1000, 6), self._seq, callback)
        self._timers.append(timer)
        return timer

    def advance_to(self, ms):
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= ms]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(timer)
            self.now_ms = timer.when
            timer.callback()
        self.now_ms = ms


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def recorder(loop):
    """Wrapped function that records (time, argument) per invocation."""
    calls = []

    def fn(value):
        calls.append((loop.now_ms, value))
        return value

    fn.calls = calls
    return fn


def make(fn, loop, wait, **kwargs):
    return Debouncer(fn, wait, loop=loop, clock=lambda: loop.now_ms, **kwargs)


class TestTrailing:
    """Default trailing-edge behavior."""

    def test_burst_collapses_to_last_call(self, loop, recorder):
        """Calls at 0, 30 and 60 with wait=100 give one call at 160 with the last argument."""
        d = make(recorder, loop, 100)
        for t, value in [(0, "A"), (30, "B"), (60, "C")]:
            loop.advance_to(t)
            assert d("%s" % value) is None

        loop.advance_to(159)
        assert recorder.calls == []
        assert d.pending()

        loop.advance_to(1000)
        assert recorder.calls == [(160, "C")]
        assert not d.pending()
        assert d.result == "C"

    def test_separate_bursts_each_invoke(self, loop, recorder):
        d = make(recorder, loop, 100)
        d("first")
        loop.advance_to(500)
        d("second")
        loop.advance_to(1000)
        assert recorder.calls == [(100, "first"), (600, "second")]

    def test_keyword_arguments_forwarded(self, loop):
        received = []
        d = make(lambda *args, **kwargs: received.append((args, kwargs)), loop, 50)
        d(1, key="x")
        loop.advance_to(100)
        assert received == [((1,), {"key": "x"})]


class TestLeading:
    """Leading-edge configurations."""

    def test_leading_only(self, loop, recorder):
        d = make(recorder, loop, 100, leading=True, trailing=False)
        d("a")
        assert recorder.calls == [(0, "a")]

        for t in (10, 20):
            loop.advance_to(t)
            d("b")
        loop.advance_to(500)
        assert recorder.calls == [(0, "a")]

        loop.advance_to(600)
        d("c")
        assert recorder.calls == [(0, "a"), (600, "c")]

    def test_leading_and_trailing(self, loop, recorder):
        d = make(recorder, loop, 100, leading=True)
        d("a")
        loop.advance_to(50)
        d("b")
        loop.advance_to(1000)
        assert recorder.calls == [(0, "a"), (150, "b")]

    def test_leading_and_trailing_single_call_invokes_once(self, loop, recorder):
        d = make(recorder, loop, 100, leading=True)
        d("a")
        loop.advance_to(1000)
        assert recorder.calls == [(0, "a")]

    def test_neither_edge_is_rejected(self, loop, recorder):
        with pytest.raises(ValueError):
            make(recorder, loop, 100, leading=False, trailing=False)

    def test_negative_wait_rejected(self, loop, recorder):
        with pytest.raises(ValueError):
            make(recorder, loop, -1)


class TestMaxWait:
    """max_wait ceiling under continuous calls."""

    def test_invokes_by_max_wait(self, loop, recorder):
        """Calls every 50ms with wait=100, max_wait=200 still invoke at 200."""
        d = make(recorder, loop, 100, max_wait=200)
        for t in range(0, 301, 50):
            loop.advance_to(t)
            d(t)

        assert recorder.calls[0] == (200, 150)

        loop.advance_to(2000)
        assert [t for t, _ in recorder.calls] == [200, 400]
        assert recorder.calls[-1] == (400, 300)
        assert not d.pending()

    def test_never_exceeds_max_wait_between_invocations(self, loop, recorder):
        d = make(recorder, loop, 100, max_wait=250)
        for t in range(0, 1001, 40):
            loop.advance_to(t)
            d(t)
        loop.advance_to(3000)

        times = [0] + [t for t, _ in recorder.calls]
        assert all(b - a <= 250 for a, b in zip(times, times[1:]))

    def test_max_wait_not_below_wait(self, loop, recorder):
        d = make(recorder, loop, 100, max_wait=10)
        assert d.max_wait == 100


class TestControl:
    """cancel, flush and pending."""

    def test_cancel(self, loop, recorder):
        d = make(recorder, loop, 100, max_wait=200)
        d("a")
        d.cancel()
        assert not d.pending()
        loop.advance_to(1000)
        assert recorder.calls == []

    def test_cancel_resets_state(self, loop, recorder):
        d = make(recorder, loop, 100, leading=True)
        d("a")
        d.cancel()
        loop.advance_to(10)
        d("b")
        assert recorder.calls == [(0, "a"), (10, "b")]

    def test_flush_runs_pending(self, loop, recorder):
        d = make(recorder, loop, 100)
        d("a")
        loop.advance_to(40)
        assert d.flush() == "a"
        assert recorder.calls == [(40, "a")]
        assert not d.pending()
        loop.advance_to(1000)
        assert len(recorder.calls) == 1

    def test_flush_without_pending_returns_last_result(self, loop, recorder):
        d = make(recorder, loop, 100)
        assert d.flush() is None
        d("a")
        loop.advance_to(200)
        assert d.flush() == "a"
        assert len(recorder.calls) == 1

    def test_exceptions_propagate(self, loop):
        def boom(value):
            raise RuntimeError(value)

        d = make(boom, loop, 100)
        d("bad")
        with pytest.raises(RuntimeError, match="bad"):
            d.flush()

    def test_decorator(self, loop):
        calls = []

        @debounce(100, loop=loop, clock=lambda: loop.now_ms)
        def save(value):
            """Save the value."""
            calls.append(value)

        assert isinstance(save, Debouncer)
        assert save.__name__ == "save"
        assert save.__doc__ == "Save the value."
        save(1)
        save(2)
        loop.advance_to(200)
        assert calls == [2]


class TestClockSkew:
    """A clock that moves backwards counts as enough elapsed time."""

    def test_backwards_clock_invokes_mid_burst(self, loop):
        now = [1000.0]
        calls = []
        d = Debouncer(calls.append, 100, max_wait=200, loop=loop, clock=lambda: now[0])

        d("a")
        assert calls == []
        assert d.pending()

        now[0] = 400.0
        d("b")
        assert calls == ["b"]
        assert d.pending()

        assert d.flush() == "b"
        assert calls == ["b"]
        assert not d.pending()

    def test_backwards_clock_without_max_wait_keeps_trailing_call(self, loop):
        now = [1000.0]
        calls = []
        d = Debouncer(calls.append, 100, loop=loop, clock=lambda: now[0])

        d("a")
        now[0] = 400.0
        d("b")
        assert calls == []
        assert d.flush() == "b"
        assert calls == ["b"]

    def test_backwards_clock_when_idle_starts_new_burst(self, loop):
        now = [1000.0]
        calls = []
        d = Debouncer(calls.append, 100, leading=True, loop=loop, clock=lambda: now[0])

        d("a")
        d.flush()
        now[0] = 1050.0
        d("b")
        assert calls == ["a"]
        d.flush()

        now[0] = 500.0
        d("c")
        assert calls == ["a", "b", "c"]


class TestRealLoop:
    """Debouncer on a running asyncio loop."""

    @pytest.mark.asyncio
    async def test_runs_on_event_loop(self):
        calls = []
        d = Debouncer(calls.append, 20)
        d(1)
        d(2)
        d(3)
        assert calls == []
        await asyncio.sleep(0.1)
        assert calls == [3]
