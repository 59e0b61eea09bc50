# factexplorer/facts/worker.py
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .filters import search_rows
from .types import FactRow

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterRequest:
    generation: int
    future: Future


class FilterWorker:
    """
    Runs the pill/live-term match loop off the caller's thread.

    Rows and pills are handed over by value (tuples) and the worker keeps no
    state besides a generation counter: every submit supersedes the previous
    one, and collect() returns None for any request that is no longer the latest.
    """

    def __init__(self, executor: Optional[Executor] = None):
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="fact-filter")
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def submit(self, rows: Sequence[FactRow], pills: Sequence[str], live_term: str = "") -> FilterRequest:
        with self._lock:
            self._generation += 1
            generation = self._generation
        rows_t: Tuple[FactRow, ...] = tuple(rows)
        pills_t: Tuple[str, ...] = tuple(pills)
        future = self._executor.submit(search_rows, rows_t, pills_t, live_term)
        return FilterRequest(generation=generation, future=future)

    def is_current(self, request: FilterRequest) -> bool:
        with self._lock:
            return request.generation == self._generation

    def collect(self, request: FilterRequest, timeout: Optional[float] = None) -> Optional[List[FactRow]]:
        """Wait for a request; stale results are dropped and reported as None."""
        result = request.future.result(timeout=timeout)
        if not self.is_current(request):
            log.debug("discarding stale filter result (generation %d)", request.generation)
            return None
        return result

    def close(self):
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
