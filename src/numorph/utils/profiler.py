"""Wall-clock timing for the paint path.

Provides:
    - timer(): times a block and reports to a sink (or the debug log)
    - TimerAccumulator: count / last / total of repeated measurements

The shape drawable keeps one TimerAccumulator to count and time its outline
and shadow regenerations; the preview script times whole renders.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Time the enclosed block.

    Parameters
    ----------
    name : str
        Label passed to ``sink`` / used in the log line
    sink : callable, optional
        ``sink(name, seconds)``; the duration is logged at DEBUG when None

    Examples
    --------
    >>> timings = {}
    >>> with timer("flat_normal", sink=timings.__setitem__):
    ...     button.render()
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        if sink is None:
            logger.debug(f"{name} took {dt * 1000:.2f} ms")
        else:
            sink(name, dt)


class TimerAccumulator:
    """Running totals for a repeatedly measured operation.

    Attributes
    ----------
    name : str
    count : int
        Completed measurements
    last : float
        Duration of the most recent measurement (s)
    total_time : float
        Sum of all durations (s)
    """

    def __init__(self, name: str):
        self.name = name
        self.reset()

    @contextmanager
    def measure(self):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.last = time.perf_counter() - t0
            self.total_time += self.last
            self.count += 1

    def mean(self) -> float:
        """Mean duration (s); 0.0 before the first measurement."""
        if not self.count:
            return 0.0
        return self.total_time / self.count

    def reset(self) -> None:
        self.count = 0
        self.last = 0.0
        self.total_time = 0.0

    def __repr__(self) -> str:
        return f"TimerAccumulator(name={self.name!r}, count={self.count}, mean={self.mean() * 1000:.2f} ms)"
