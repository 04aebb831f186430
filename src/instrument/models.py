"""
Data models for timed awaitables
Explicit timer state and the result carrier returned on completion
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

R = TypeVar("R")


@dataclass(frozen=True)
class TimedResult(Generic[R]):
    """
    Output of a finished TimedFuture

    Attributes:
        result: Exactly what the inner awaitable returned
        elapsed: Wall-clock seconds from first resumption to completion
    """
    result: R
    elapsed: float

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    def unwrap(self) -> R:
        return self.result


class NotStarted:
    """Timer state before the first resumption attempt"""

    _instance: NotStarted | None = None

    def __new__(cls) -> NotStarted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotStarted"


NOT_STARTED = NotStarted()


@dataclass(frozen=True)
class Started:
    """Timer state once the clock has been read; never replaced afterwards"""
    at: float

    def elapsed(self, now: float) -> float:
        # perf_counter is monotonic, but injected clocks need not be
        return max(0.0, now - self.at)


TimerState = Union[NotStarted, Started]
