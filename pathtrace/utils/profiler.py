"""Wall-clock timing for sampling passes.

``scripts/sample_path.py`` uses these to report the one-off flattening
cost (a memo miss) separately from the per-sample cost a presentation layer
pays on every frame.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None) -> Iterator[None]:
    """Time a block.

    Parameters
    ----------
    name : str
        Label for the measurement
    sink : callable, optional
        Receives ``(name, seconds)``; when None the duration is logged at INFO

    Examples
    --------
    >>> with timer("flatten"):
    ...     approximate_length(path)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is None:
            logger.info("%s took %.3f ms", name, elapsed * 1e3)
        else:
            sink(name, elapsed)


@dataclass
class TimerAccumulator:
    """Running total over repeated measurements (e.g. one per point_at call)."""

    name: str
    total_time: float = 0.0
    count: int = 0

    @contextmanager
    def measure(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.total_time += time.perf_counter() - start
            self.count += 1

    def mean(self) -> float:
        """Seconds per measurement; 0.0 before the first one."""
        return self.total_time / self.count if self.count else 0.0

    def reset(self) -> None:
        self.total_time = 0.0
        self.count = 0
