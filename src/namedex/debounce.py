"""RxPY debounce for free-text search input.

Rapid edits are coalesced: every push restarts the quiet period and only
the last value pending when it elapses is delivered. Cancelling or
disposing the debouncer drops anything still pending.
"""

from __future__ import annotations

from typing import Callable

from reactivex import operators as ops
from reactivex.abc import DisposableBase, SchedulerBase
from reactivex.subject import Subject

DEBOUNCE_SECONDS = 0.3


class QueryDebouncer:
    """Coalesce query edits into a single delayed callback.

    Args:
        on_query: Called with the settled query text.
        scheduler: RxPY scheduler driving the timer (e.g. AsyncIOScheduler
            bound to the running loop).
        seconds: Quiet period before a query fires.
    """

    def __init__(
        self,
        on_query: Callable[[str], None],
        scheduler: SchedulerBase | None = None,
        seconds: float = DEBOUNCE_SECONDS,
    ) -> None:
        self.input_subject: Subject[str] = Subject()
        self.seconds = seconds
        self._on_query = on_query
        self._scheduler = scheduler
        self._subscription: DisposableBase | None = self._subscribe()

    def _subscribe(self) -> DisposableBase:
        return self.input_subject.pipe(
            ops.debounce(self.seconds, scheduler=self._scheduler),
        ).subscribe(on_next=self._on_query)

    def push(self, text: str) -> None:
        """Record a keystroke; restarts the quiet period."""
        if self._subscription is not None:
            self.input_subject.on_next(text)

    def cancel(self) -> None:
        """Drop the pending value, if any; later pushes debounce as usual."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = self._subscribe()

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
