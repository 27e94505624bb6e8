"""Database configuration and session management."""

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from study_helper.config import Settings


class Base(DeclarativeBase):
    """Base class for all database models."""


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ships with foreign key enforcement off
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database_engine(settings: Settings) -> Engine:
    """Create the engine for the local study store."""
    url = settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
        # One shared connection, otherwise every thread sees its own empty database
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False})

    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory used by the store repositories."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_schema(engine: Engine) -> None:
    """Create the subject and question tables if they do not exist."""
    # Importing the models registers them on Base.metadata
    from study_helper import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def dispose_engine(engine: Engine) -> None:
    """Dispose database engine on shutdown."""
    engine.dispose()
