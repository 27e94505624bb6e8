"""
Table-level change tracking for the local store.

Session events record which tables a transaction touched. Once the
transaction commits those tables become pending, and ``refresh()``
hands them to every observer watching one of them. Observers never run
inside a SQLAlchemy event hook, so they are free to query the store.
"""

import itertools
import threading
from collections.abc import Callable, Iterable

import structlog
from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker

logger = structlog.get_logger(__name__)

_TOUCHED_TABLES = "study_helper.touched_tables"


class InvalidationTracker:
    """Collects committed table changes and notifies table observers."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._lock = threading.Lock()
        self._pending: set[str] = set()
        self._observers: dict[int, tuple[frozenset[str], Callable[[], None]]] = {}
        self._tokens = itertools.count(1)

        event.listen(session_factory, "after_flush", self._collect_flushed)
        event.listen(session_factory, "do_orm_execute", self._collect_executed)
        event.listen(session_factory, "after_commit", self._mark_committed)
        event.listen(session_factory, "after_rollback", self._discard)

    def add_observer(self, tables: Iterable[str], callback: Callable[[], None]) -> int:
        """Watch ``tables``; returns a token for ``remove_observer``."""
        token = next(self._tokens)
        with self._lock:
            self._observers[token] = (frozenset(tables), callback)
        return token

    def remove_observer(self, token: int) -> None:
        with self._lock:
            self._observers.pop(token, None)

    def refresh(self) -> set[str]:
        """Notify observers of every table committed since the last refresh."""
        with self._lock:
            tables, self._pending = self._pending, set()
            callbacks = [
                callback for watched, callback in self._observers.values() if watched & tables
            ]

        if tables:
            logger.debug("tables_invalidated", tables=sorted(tables), observers=len(callbacks))
        for callback in callbacks:
            callback()
        return tables

    def _touched(self, session: Session) -> set[str]:
        return session.info.setdefault(_TOUCHED_TABLES, set())

    def _collect_flushed(self, session: Session, flush_context: object) -> None:
        touched = self._touched(session)
        for instance in itertools.chain(session.new, session.dirty, session.deleted):
            touched.add(instance.__table__.name)

    def _collect_executed(self, orm_execute_state: ORMExecuteState) -> None:
        if not (orm_execute_state.is_update or orm_execute_state.is_delete):
            return
        mapper = orm_execute_state.bind_mapper
        if mapper is not None:
            self._touched(orm_execute_state.session).add(mapper.local_table.name)

    def _mark_committed(self, session: Session) -> None:
        touched = session.info.pop(_TOUCHED_TABLES, None)
        if touched:
            with self._lock:
                self._pending |= touched

    def _discard(self, session: Session) -> None:
        session.info.pop(_TOUCHED_TABLES, None)
