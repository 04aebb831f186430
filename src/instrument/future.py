"""
Timed awaitable wrapper

TimedFuture drives an inner awaitable step by step, so every resumption the
event loop performs passes through it. The clock starts on the first
resumption attempt, not at construction.
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Coroutine
from typing import Any, Awaitable, Callable, Generic, Iterator, Optional, TypeVar

from src.instrument.models import NOT_STARTED, Started, TimedResult, TimerState

R = TypeVar("R")

Clock = Callable[[], float]


class TimedFuture(Coroutine, Generic[R]):
    """
    Wraps an awaitable and measures how long it took to run

    Usage:
        res = await TimedFuture(fetch_page(url))
        res.result    # what fetch_page() returned
        res.elapsed   # seconds between first resumption and completion

    Exceptions from the inner awaitable, cancellation included, pass through
    untouched and no TimedResult is produced.
    """

    def __init__(self, awaitable: Awaitable[R], *, clock: Optional[Clock] = None):
        if not inspect.isawaitable(awaitable):
            raise TypeError(f"TimedFuture expects an awaitable, got {type(awaitable).__name__}")
        self._awaitable = awaitable
        self._iterator: Optional[Iterator[Any]] = None
        self._clock: Clock = clock or time.perf_counter
        self._state: TimerState = NOT_STARTED
        self._done = False
        self._finished = False

    def __repr__(self) -> str:
        status = "done" if self._done else self._state
        return f"TimedFuture({self._awaitable!r}, {status})"

    @property
    def started(self) -> bool:
        return isinstance(self._state, Started)

    @property
    def started_at(self) -> float | None:
        if isinstance(self._state, Started):
            return self._state.at
        return None

    @property
    def done(self) -> bool:
        return self._done

    # ---------- coroutine protocol ----------

    def __await__(self):
        return self

    def __iter__(self):
        return self

    def __next__(self):
        return self.send(None)

    def send(self, value: Any) -> Any:
        started = self._resume()
        inner = self._inner()
        try:
            if value is None:
                yielded = next(inner)
            else:
                yielded = inner.send(value)
        except StopIteration as stop:
            raise self._finish(started, stop.value) from None
        except BaseException:
            self._finished = True
            raise
        return yielded

    def throw(self, typ, val=None, tb=None) -> Any:
        started = self._resume()
        inner = self._inner()
        throw = getattr(inner, "throw", None)
        if throw is None:
            # Plain iterators cannot receive exceptions; raise it here as `yield from` does.
            self._finished = True
            if val is None:
                raise typ
            raise val.with_traceback(tb) if tb is not None else val
        try:
            if val is None and tb is None:
                yielded = throw(typ)
            else:
                yielded = throw(typ, val, tb)
        except StopIteration as stop:
            raise self._finish(started, stop.value) from None
        except BaseException:
            self._finished = True
            raise
        return yielded

    def close(self) -> None:
        self._finished = True
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()

    # ---------- internals ----------

    def _resume(self) -> Started:
        """Return the Started state, reading the clock only on the first call"""
        if self._finished:
            raise RuntimeError("cannot reuse already awaited TimedFuture")
        if not isinstance(self._state, Started):
            self._state = Started(self._clock())
        return self._state

    def _inner(self) -> Iterator[Any]:
        if self._iterator is None:
            aw = self._awaitable
            if inspect.isgenerator(aw) and aw.gi_code.co_flags & inspect.CO_ITERABLE_COROUTINE:
                # @types.coroutine generators are awaitable without an __await__ method
                self._iterator = aw
            else:
                self._iterator = aw.__await__()
        return self._iterator

    def _finish(self, started: Started, result: R) -> StopIteration:
        elapsed = started.elapsed(self._clock())
        self._done = True
        self._finished = True
        return StopIteration(TimedResult(result, elapsed))
