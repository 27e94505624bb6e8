"""
Dependency Injection Container.

A small DI container holding the process-wide services of the study
helper: the database engine, the store repositories, the remote fetcher
and the study repository built on top of them.

Usage:
    container = Container()
    container.register_instance(Settings, settings)
    container.register_factory(
        StudyFetcher,
        lambda c: StudyFetcher(c.resolve(Settings).STUDY_API_BASE_URL),
        singleton=True,
    )

    fetcher = container.resolve(StudyFetcher)
"""

import threading
from collections.abc import Callable
from typing import TypeVar, overload

T = TypeVar("T")


class DependencyNotFoundError(Exception):
    """Raised when a dependency cannot be resolved."""

    def __init__(self, dependency_type: type) -> None:
        self.dependency_type = dependency_type
        super().__init__(f"No registration found for {dependency_type.__name__}")


class CircularDependencyError(Exception):
    """Raised when a circular dependency is detected."""

    def __init__(self, chain: list[type]) -> None:
        self.chain = chain
        names = " -> ".join(t.__name__ for t in chain)
        super().__init__(f"Circular dependency detected: {names}")


class Container:
    """
    Simple dependency injection container.

    Supports:
    - Factory-based registration
    - Singleton and transient lifetimes
    - Pre-built instances

    Resolution holds a re-entrant lock, so a singleton is constructed at
    most once even when several threads ask for it first.
    """

    def __init__(self) -> None:
        self._registrations: dict[type, _Registration] = {}
        self._singletons: dict[type, object] = {}
        self._resolving: list[type] = []
        self._lock = threading.RLock()

    def register_factory(
        self,
        interface: type[T],
        factory: Callable[["Container"], T],
        *,
        singleton: bool = False,
    ) -> None:
        """
        Register a factory function for creating instances.

        Args:
            interface: The type to register
            factory: A function that takes the container and returns an instance
            singleton: If True, the factory is only called once
        """
        with self._lock:
            self._registrations[interface] = _Registration(factory=factory, singleton=singleton)

    def register_instance(self, interface: type[T], instance: T) -> None:
        """
        Register a pre-created instance (always singleton).

        Args:
            interface: The type to register
            instance: The instance to return when resolved
        """
        with self._lock:
            self._registrations[interface] = _Registration(factory=None, singleton=True)
            self._singletons[interface] = instance

    @overload
    def resolve(self, interface: type[T]) -> T: ...

    @overload
    def resolve(self, interface: type[T], default: T) -> T: ...

    def resolve(self, interface: type[T], default: object = ...) -> T:  # type: ignore[assignment]
        """
        Resolve a dependency by its type.

        Args:
            interface: The type to resolve
            default: Default value if not registered (raises if not provided)

        Returns:
            An instance built by the registered factory

        Raises:
            DependencyNotFoundError: If no registration exists and no default
            CircularDependencyError: If circular dependency detected
        """
        with self._lock:
            if interface in self._singletons:
                return self._singletons[interface]  # type: ignore[return-value]

            if interface in self._resolving:
                raise CircularDependencyError([*self._resolving, interface])

            registration = self._registrations.get(interface)
            if registration is None or registration.factory is None:
                if default is not ...:
                    return default  # type: ignore[return-value]
                raise DependencyNotFoundError(interface)

            self._resolving.append(interface)
            try:
                instance = registration.factory(self)
            finally:
                self._resolving.remove(interface)

            if registration.singleton:
                self._singletons[interface] = instance

            return instance  # type: ignore[return-value]

    def resolved(self, interface: type[T]) -> T | None:
        """Return the singleton for ``interface`` if it has been built, else None."""
        with self._lock:
            return self._singletons.get(interface)  # type: ignore[return-value]

    def has(self, interface: type) -> bool:
        """Check if a type is registered."""
        return interface in self._registrations


class _Registration:
    """Internal registration record."""

    __slots__ = ("factory", "singleton")

    def __init__(
        self,
        factory: Callable[[Container], object] | None,
        singleton: bool,
    ) -> None:
        self.factory = factory
        self.singleton = singleton
