"""Protocol for table-level change notification."""

from collections.abc import Callable, Iterable
from typing import Protocol


class ChangeTrackerProtocol(Protocol):
    """Tells observers which store tables changed after a committed write."""

    def add_observer(self, tables: Iterable[str], callback: Callable[[], None]) -> int: ...

    def remove_observer(self, token: int) -> None: ...

    def refresh(self) -> set[str]:
        """Notify observers of tables committed since the last call."""
        ...
