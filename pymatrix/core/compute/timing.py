"""
Wall-clock timing for the result-returning entry points.

Backends wrap each phase of a computation (planning, elimination,
diagnostics, multiplication) in a named section; the totals end up in
Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus accumulating named sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('plan'):
            order = plan_chain(dims)
        with timer.section('multiply'):
            product = evaluate_chain(matrices, order)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.004, 'plan': 0.001, 'multiply': 0.003}

    A section entered more than once accumulates. Sections are not
    required to be disjoint.
    """

    def __init__(self):
        self._started_at: float | None = None
        self._total: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        """
        Freeze the total.

        Raises:
            RuntimeError: If start() was never called
        """
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._total is None

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent inside the block to section `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - t0
            )

    def result(self) -> dict[str, float]:
        """
        Seconds per section, with the overall time under 'total_seconds'.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block; the timer is stopped on exit, even on error.

        with timed() as timer:
            inverse(A)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
