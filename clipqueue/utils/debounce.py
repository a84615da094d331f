"""
Debounce utility for collapsing bursts of calls into a single invocation.

A Debouncer wraps a function so that rapid repeated calls run it at most once
per settled burst (twice when both edges are enabled), with an optional
max_wait ceiling on how long a continuous stream of calls can defer it.

Timers run on an asyncio event loop via loop.call_later; all times are in
milliseconds.

Example:
    >>> save = Debouncer(autosave_project, wait=2000, max_wait=10000)
    >>> save(project)        # schedules a save 2s after the last edit
    >>> save.flush()         # runs it now and returns its result
"""

import asyncio
import functools
from typing import Any, Callable, Optional, Tuple, Dict


class Debouncer:
    """Rate-limit calls to func; one instance owns the timing state of one wrapped function."""

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        *,
        leading: bool = False,
        trailing: bool = True,
        max_wait: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if not leading and not trailing:
            raise ValueError("Debouncer with leading=False and trailing=False would never call the function")
        if wait < 0:
            raise ValueError("wait must be >= 0")

        self._func = func
        self.wait = wait
        self.leading = leading
        self.trailing = trailing
        self.max_wait = max(max_wait, wait) if max_wait is not None else None

        self._loop = loop
        self._clock = clock

        self._timer: Optional[asyncio.TimerHandle] = None
        self._max_timer: Optional[asyncio.TimerHandle] = None
        self._last_call_time: Optional[float] = None
        self._last_invoke_time: Optional[float] = None
        self._last_args: Optional[Tuple[tuple, Dict[str, Any]]] = None
        self._result: Any = None

        functools.update_wrapper(self, func)

    # Clock and timers

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop if self._loop is not None else asyncio.get_running_loop()

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return self._get_loop().time() * 1000

    def _schedule(self, delay_ms: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(delay_ms, 0) / 1000, callback)

    def _arm_max_timer(self, delay_ms: float) -> None:
        if self.max_wait is None:
            return
        if self._max_timer is not None:
            self._max_timer.cancel()
        self._max_timer = self._schedule(delay_ms, self._max_wait_expired)

    def _clear_timers(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._max_timer is not None:
            self._max_timer.cancel()
            self._max_timer = None

    # Decision logic

    def _should_invoke(self, now: float) -> bool:
        if self._last_call_time is None:
            return True

        since_last_call = now - self._last_call_time
        if since_last_call >= self.wait or since_last_call < 0:
            return True

        return (
            self.max_wait is not None
            and self._last_invoke_time is not None
            and now - self._last_invoke_time >= self.max_wait
        )

    def _remaining_wait(self, now: float) -> float:
        time_waiting = self.wait - (now - self._last_call_time)
        if self.max_wait is None or self._last_invoke_time is None:
            return time_waiting
        return min(time_waiting, self.max_wait - (now - self._last_invoke_time))

    def _invoke(self, now: float) -> Any:
        args, kwargs = self._last_args
        self._last_args = None
        self._last_invoke_time = now
        self._result = self._func(*args, **kwargs)
        return self._result

    def _leading_edge(self, now: float) -> None:
        self._last_invoke_time = now
        self._timer = self._schedule(self.wait, self._timer_expired)
        self._arm_max_timer(self.max_wait)
        if self.leading:
            self._invoke(now)

    def _trailing_edge(self, now: float) -> Any:
        self._clear_timers()
        if self.trailing and self._last_args is not None:
            return self._invoke(now)
        self._last_args = None
        return self._result

    def _timer_expired(self) -> None:
        now = self._now()
        if self._should_invoke(now):
            self._trailing_edge(now)
        else:
            self._timer = self._schedule(self._remaining_wait(now), self._timer_expired)

    def _max_wait_expired(self) -> None:
        self._max_timer = None
        if self._timer is None:
            return
        now = self._now()
        if self.trailing and self._last_args is not None and self._should_invoke(now):
            self._arm_max_timer(self.max_wait)
            self._invoke(now)

    # Public API

    def invoke(self, *args, **kwargs) -> None:
        now = self._now()
        is_invoking = self._should_invoke(now)

        self._last_args = (args, kwargs)
        self._last_call_time = now

        if is_invoking:
            if self._timer is None:
                self._leading_edge(now)
                return
            if self.max_wait is not None:
                # max_wait deadline reached while the burst is still active
                self._timer.cancel()
                self._timer = self._schedule(self.wait, self._timer_expired)
                self._arm_max_timer(self.max_wait)
                self._invoke(now)
                return

        if self._timer is None:
            self._timer = self._schedule(self.wait, self._timer_expired)
            if self.max_wait is not None and self._last_invoke_time is not None:
                self._arm_max_timer(self.max_wait - (now - self._last_invoke_time))

    __call__ = invoke

    def cancel(self) -> None:
        """Drop any scheduled invocation and forget all timing state."""
        self._clear_timers()
        self._last_call_time = None
        self._last_invoke_time = None
        self._last_args = None

    def flush(self) -> Any:
        """Run the pending invocation now, or return the last result if nothing is pending."""
        if self._timer is None:
            return self._result
        return self._trailing_edge(self._now())

    def pending(self) -> bool:
        return self._timer is not None

    @property
    def result(self) -> Any:
        return self._result


def debounce(
    wait: float,
    *,
    leading: bool = False,
    trailing: bool = True,
    max_wait: Optional[float] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Callable[[Callable[..., Any]], Debouncer]:
    """Decorator form of Debouncer."""
    def decorator(func: Callable[..., Any]) -> Debouncer:
        return Debouncer(func, wait, leading=leading, trailing=trailing,
                         max_wait=max_wait, loop=loop, clock=clock)
    return decorator
