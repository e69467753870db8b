"""
Wall-clock timing of solver calls.

A solver wraps its whole call in a Timer and each algorithm phase in
Timer.phase; the resulting dict becomes Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Timer for one solver call, split into named phases.

    Usage:
        with Timer() as timer, timer.phase('factorization'):
            params = lup_factor(A)
        timer.result()
        # {'total_seconds': 0.004, 'factorization': 0.004}

    A phase entered more than once accumulates.
    """

    def __init__(self) -> None:
        self._phases: dict[str, float] = {}
        self._began: float | None = None
        self._total: float | None = None

    def __enter__(self) -> 'Timer':
        self._began = time.perf_counter()
        self._total = None
        return self

    def __exit__(self, *exc_info) -> bool:
        self._total = time.perf_counter() - self._began
        return False

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to phase `name`."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + time.perf_counter() - began

    def result(self) -> dict[str, float]:
        """
        Total and per-phase seconds.

        Raises:
            RuntimeError: If the timed block has not finished
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before the timed block finished")
        return {'total_seconds': self._total, **self._phases}
