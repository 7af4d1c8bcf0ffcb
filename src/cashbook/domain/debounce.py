"""Debounced search evaluation.

Interactive callers feed every keystroke to ``DebouncedSearch.update``; the
search itself only runs once the query has been stable for ``delay`` seconds.
Each update cancels whatever evaluation was still pending, so results always
reflect the latest query.
"""

import threading
from typing import Callable, Optional, Protocol, Sequence

from cashbook.domain.entities import Transaction
from cashbook.domain.filters import search_transactions
from cashbook.logging_setup import get_logger

DEFAULT_DELAY = 0.5

logger = get_logger(__name__)


class ScheduledTask(Protocol):
    """Handle of a scheduled callback that can still be cancelled."""

    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], ScheduledTask]
ResultCallback = Callable[[list[Transaction]], None]


def timer_scheduler(delay: float, callback: Callable[[], None]) -> ScheduledTask:
    """Run callback after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class DebouncedSearch:
    """Search that defers evaluation until the query stops changing."""

    def __init__(
        self,
        on_results: ResultCallback,
        delay: float = DEFAULT_DELAY,
        scheduler: Scheduler = timer_scheduler,
    ):
        """Initialize debounced search.

        Args:
            on_results: Called with the filtered transactions
            delay: Seconds to wait after the last update
            scheduler: Schedules a callback and returns a cancelable handle
        """
        self.on_results = on_results
        self.delay = delay
        self.scheduler = scheduler
        self._pending: Optional[ScheduledTask] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """True while an evaluation is scheduled but has not run."""
        return self._pending is not None

    def update(self, transactions: Sequence[Transaction], query: Optional[str]) -> None:
        """Register a new query, superseding any pending evaluation.

        An empty query delivers the unfiltered transactions immediately.
        """
        self.cancel()

        if query is None or not query.strip():
            self.on_results(list(transactions))
            return

        snapshot = list(transactions)
        with self._lock:
            self._generation += 1
            generation = self._generation

        def run() -> None:
            with self._lock:
                if generation != self._generation:
                    return
                self._generation += 1
                self._pending = None
            self.on_results(search_transactions(snapshot, query))

        task = self.scheduler(self.delay, run)
        with self._lock:
            # Only still pending if it has neither run nor been superseded
            if generation == self._generation:
                self._pending = task
        logger.debug("Scheduled search for %r in %.2fs", query, self.delay)

    def cancel(self) -> None:
        """Cancel the pending evaluation, if any."""
        with self._lock:
            self._generation += 1
            task, self._pending = self._pending, None
        if task is not None:
            task.cancel()
