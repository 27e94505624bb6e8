"""
Push-based observable values.

An ``Observable`` holds the latest published value and hands every new
value to its subscribers. A subscriber that joins after a value was
published receives that value straight away. Subscribers stay registered
until they call ``Subscription.unsubscribe()``.

Delivery goes through a dispatcher: a callable that runs the given
zero-argument function, e.g. by posting it to a UI thread. The default
runs it inline on the publishing thread.
"""

import itertools
import threading
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, Generic, TypeVar

from study_helper.application.study.protocols.change_tracker import ChangeTrackerProtocol

T = TypeVar("T")

Dispatcher = Callable[[Callable[[], None]], Any]


def deliver_inline(callback: Callable[[], None]) -> None:
    callback()


class Subscription:
    """Handle returned by ``subscribe``; also usable as a context manager."""

    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel: Callable[[], None] | None = cancel

    def unsubscribe(self) -> None:
        if self._cancel is not None:
            cancel, self._cancel = self._cancel, None
            cancel()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class Observable(Generic[T]):
    """Latest-value holder that pushes every published value to subscribers."""

    def __init__(self, dispatcher: Dispatcher | None = None) -> None:
        self._dispatch = dispatcher or deliver_inline
        self._lock = threading.Lock()
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._tokens = itertools.count(1)
        self._has_value = False
        self._value: T | None = None

    @property
    def value(self) -> T | None:
        """Latest published value, None before the first publish."""
        with self._lock:
            return self._value

    @property
    def has_value(self) -> bool:
        with self._lock:
            return self._has_value

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            self._has_value = True
            callbacks = list(self._subscribers.values())
        for callback in callbacks:
            self._dispatch(partial(callback, value))

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        with self._lock:
            first = not self._subscribers
            token = next(self._tokens)
            self._subscribers[token] = callback
            has_value, value = self._has_value, self._value

        if has_value:
            self._dispatch(partial(callback, value))
        if first:
            self._on_active()
        return Subscription(partial(self._unsubscribe, token))

    def _unsubscribe(self, token: int) -> None:
        with self._lock:
            removed = self._subscribers.pop(token, None) is not None
            last = removed and not self._subscribers
        if last:
            self._on_inactive()

    def _on_active(self) -> None:
        """Called when the first subscriber arrives."""

    def _on_inactive(self) -> None:
        """Called when the last subscriber leaves."""


class LiveQuery(Observable[T]):
    """
    Observable mirror of a store query.

    While it has subscribers the query is re-run after every committed
    write to one of ``tables``. Loads go through ``loader`` so they are
    ordered with the writes they follow.
    """

    def __init__(
        self,
        query: Callable[[], T],
        tables: Iterable[str],
        tracker: ChangeTrackerProtocol,
        loader: Callable[[Callable[[], None]], Any],
        dispatcher: Dispatcher | None = None,
    ) -> None:
        super().__init__(dispatcher)
        self._query = query
        self._tables = frozenset(tables)
        self._tracker = tracker
        self._loader = loader
        self._observer_token: int | None = None

    def reload(self) -> None:
        """Run the query now and publish its result."""
        self.publish(self._query())

    def _on_active(self) -> None:
        self._observer_token = self._tracker.add_observer(self._tables, self.reload)
        self._loader(self.reload)

    def _on_inactive(self) -> None:
        if self._observer_token is not None:
            self._tracker.remove_observer(self._observer_token)
            self._observer_token = None
