"""Tests for observables and live queries."""

from collections.abc import Callable, Iterable

from study_helper.application.common.observable import LiveQuery, Observable


class FakeTracker:
    """Change tracker that lets tests fire table changes by hand."""

    def __init__(self) -> None:
        self.observers: dict[int, tuple[frozenset[str], Callable[[], None]]] = {}
        self._next = 0

    def add_observer(self, tables: Iterable[str], callback: Callable[[], None]) -> int:
        self._next += 1
        self.observers[self._next] = (frozenset(tables), callback)
        return self._next

    def remove_observer(self, token: int) -> None:
        self.observers.pop(token, None)

    def refresh(self) -> set[str]:
        return set()

    def fire(self, table: str) -> None:
        for tables, callback in list(self.observers.values()):
            if table in tables:
                callback()


def run_now(task: Callable[[], None]) -> None:
    task()


class TestObservable:
    def test_no_value_before_publish(self) -> None:
        observable: Observable[int] = Observable()
        received: list[int] = []
        observable.subscribe(received.append)

        assert not observable.has_value
        assert observable.value is None
        assert received == []

    def test_publish_reaches_subscribers(self) -> None:
        observable: Observable[int] = Observable()
        first: list[int] = []
        second: list[int] = []
        observable.subscribe(first.append)
        observable.subscribe(second.append)

        observable.publish(1)
        observable.publish(2)

        assert first == [1, 2]
        assert second == [1, 2]

    def test_late_subscriber_gets_latest_value(self) -> None:
        observable: Observable[str] = Observable()
        observable.publish("Biology")
        observable.publish("History")
        received: list[str] = []

        observable.subscribe(received.append)

        assert received == ["History"]

    def test_unsubscribe_stops_delivery(self) -> None:
        observable: Observable[int] = Observable()
        received: list[int] = []
        subscription = observable.subscribe(received.append)

        subscription.unsubscribe()
        subscription.unsubscribe()
        observable.publish(1)

        assert received == []
        assert observable.subscriber_count == 0

    def test_subscription_context_manager(self) -> None:
        observable: Observable[int] = Observable()
        received: list[int] = []
        with observable.subscribe(received.append):
            observable.publish(1)
        observable.publish(2)

        assert received == [1]

    def test_dispatcher_runs_every_delivery(self) -> None:
        queued: list[Callable[[], None]] = []
        observable: Observable[int] = Observable(dispatcher=queued.append)
        received: list[int] = []
        observable.subscribe(received.append)

        observable.publish(7)
        assert received == []

        for task in queued:
            task()
        assert received == [7]


class TestLiveQuery:
    def test_loads_on_first_subscriber(self) -> None:
        tracker = FakeTracker()
        rows = ["a"]
        query = LiveQuery(lambda: list(rows), ["subject"], tracker=tracker, loader=run_now)
        received: list[list[str]] = []

        assert tracker.observers == {}
        query.subscribe(received.append)

        assert received == [["a"]]
        assert [tables for tables, _ in tracker.observers.values()] == [frozenset({"subject"})]

    def test_reloads_on_watched_table_change(self) -> None:
        tracker = FakeTracker()
        rows = ["a"]
        query = LiveQuery(lambda: list(rows), ["subject"], tracker=tracker, loader=run_now)
        received: list[list[str]] = []
        query.subscribe(received.append)

        rows.append("b")
        tracker.fire("question")
        tracker.fire("subject")

        assert received == [["a"], ["a", "b"]]

    def test_second_subscriber_shares_the_query(self) -> None:
        tracker = FakeTracker()
        calls: list[int] = []

        def query_rows() -> int:
            calls.append(1)
            return len(calls)

        query = LiveQuery(query_rows, ["subject"], tracker=tracker, loader=run_now)
        first: list[int] = []
        second: list[int] = []
        query.subscribe(first.append)
        query.subscribe(second.append)

        assert len(calls) == 1
        assert second == [1]
        assert len(tracker.observers) == 1

    def test_stops_watching_after_last_unsubscribe(self) -> None:
        tracker = FakeTracker()
        query = LiveQuery(lambda: 1, ["subject"], tracker=tracker, loader=run_now)
        first = query.subscribe(lambda value: None)
        second = query.subscribe(lambda value: None)

        first.unsubscribe()
        assert len(tracker.observers) == 1
        second.unsubscribe()
        assert tracker.observers == {}
