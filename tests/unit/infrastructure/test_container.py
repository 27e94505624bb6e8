"""Tests for the dependency injection container."""

import threading
import time

import pytest

from study_helper.infrastructure.container import (
    CircularDependencyError,
    Container,
    DependencyNotFoundError,
)


class Clock:
    pass


class Service:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


class TestContainer:
    def test_register_instance(self) -> None:
        container = Container()
        clock = Clock()
        container.register_instance(Clock, clock)

        assert container.resolve(Clock) is clock
        assert container.resolved(Clock) is clock
        assert container.has(Clock)

    def test_transient_factory_builds_each_time(self) -> None:
        container = Container()
        container.register_factory(Clock, lambda c: Clock())

        assert container.resolve(Clock) is not container.resolve(Clock)
        assert container.resolved(Clock) is None

    def test_singleton_factory_builds_once(self) -> None:
        container = Container()
        container.register_factory(Clock, lambda c: Clock(), singleton=True)
        container.register_factory(Service, lambda c: Service(c.resolve(Clock)), singleton=True)

        assert container.resolved(Service) is None
        service = container.resolve(Service)
        assert container.resolve(Service) is service
        assert service.clock is container.resolve(Clock)

    def test_singleton_built_once_across_threads(self) -> None:
        container = Container()
        built: list[Clock] = []

        def slow_factory(c: Container) -> Clock:
            time.sleep(0.05)
            clock = Clock()
            built.append(clock)
            return clock

        container.register_factory(Clock, slow_factory, singleton=True)
        results: list[Clock] = []
        threads = [
            threading.Thread(target=lambda: results.append(container.resolve(Clock)))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(built) == 1
        assert all(result is built[0] for result in results)

    def test_missing_dependency(self) -> None:
        container = Container()

        with pytest.raises(DependencyNotFoundError, match="Clock"):
            container.resolve(Clock)
        assert container.resolve(Clock, None) is None
        assert not container.has(Clock)

    def test_circular_dependency(self) -> None:
        container = Container()
        container.register_factory(Clock, lambda c: c.resolve(Service))
        container.register_factory(Service, lambda c: c.resolve(Clock))

        with pytest.raises(CircularDependencyError) as exc_info:
            container.resolve(Clock)
        assert exc_info.value.chain == [Clock, Service, Clock]
