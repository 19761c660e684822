"""Search input debouncing for Day Weaver.

Turns a stream of raw search box values into a stable committed term:

1. Every new raw value cancels any pending commit
2. A non-empty value schedules a commit after the debounce delay
3. An empty value commits immediately, so clearing the box never shows stale results

Only the most recent value's timer can ever commit (debounce, not throttle).
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from dayweaver.models.constants import DEBOUNCE_DELAY_MS

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY_SECONDS = DEBOUNCE_DELAY_MS / 1000

# call_later(delay_seconds, callback) -> handle with .cancel()
CallLater = Callable[[float, Callable[[], None]], Any]


def _loop_call_later(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class SearchDebouncer:
    """Debounced search term with a pending flag."""

    def __init__(
        self,
        on_commit: Optional[Callable[[str], None]] = None,
        delay: float = DEBOUNCE_DELAY_SECONDS,
        call_later: Optional[CallLater] = None,
    ):
        """Initialize the debouncer.

        Args:
            on_commit: Called with the committed term on every commit
            delay: Debounce delay in seconds
            call_later: Timer scheduler; defaults to the running asyncio loop
        """
        self.on_commit = on_commit
        self.delay = delay
        self._call_later = call_later or _loop_call_later
        self._handle = None
        self.raw_value = ""
        self.committed_term = ""
        self.is_debouncing = False

    def set_input(self, value: Optional[str]) -> None:
        """Record a new raw search box value."""
        value = value or ""
        self.raw_value = value
        self.cancel()

        if not value:
            self._commit("")
            return

        self.is_debouncing = True
        self._handle = self._call_later(self.delay, self._on_timer)

    def cancel(self) -> None:
        """Drop any pending commit."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.is_debouncing = False

    def _on_timer(self) -> None:
        self._handle = None
        self._commit(self.raw_value)

    def _commit(self, term: str) -> None:
        self.is_debouncing = False
        self.committed_term = term
        logger.debug(f"Committed search term {term[:50]!r}")
        if self.on_commit is not None:
            self.on_commit(term)
