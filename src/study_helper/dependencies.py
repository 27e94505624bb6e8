"""Wiring of the process-wide study services."""

import threading

import httpx
import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from study_helper.application.common.observable import Dispatcher
from study_helper.application.study.study_repository import StudyRepository
from study_helper.config import Settings, configure_logging, get_settings
from study_helper.database import (
    create_database_engine,
    create_schema,
    create_session_factory,
    dispose_engine,
)
from study_helper.infrastructure.container import Container
from study_helper.infrastructure.study.invalidation import InvalidationTracker
from study_helper.infrastructure.study.repositories import QuestionRepository, SubjectRepository
from study_helper.infrastructure.study.study_fetcher import StudyFetcher

logger = structlog.get_logger(__name__)


def _create_engine(container: Container) -> Engine:
    engine = create_database_engine(container.resolve(Settings))
    create_schema(engine)
    return engine


def build_container(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
    dispatcher: Dispatcher | None = None,
) -> Container:
    """
    Register every study service as a lazily built singleton.

    Args:
        settings: Application settings
        transport: Optional httpx transport for the remote fetcher
        dispatcher: Optional observable dispatcher, e.g. posting to a UI thread
    """
    container = Container()
    container.register_instance(Settings, settings)
    container.register_factory(Engine, _create_engine, singleton=True)
    container.register_factory(
        sessionmaker,
        lambda c: create_session_factory(c.resolve(Engine)),
        singleton=True,
    )
    container.register_factory(
        InvalidationTracker,
        lambda c: InvalidationTracker(c.resolve(sessionmaker)),
        singleton=True,
    )
    container.register_factory(
        SubjectRepository,
        lambda c: SubjectRepository(c.resolve(sessionmaker)),
        singleton=True,
    )
    container.register_factory(
        QuestionRepository,
        lambda c: QuestionRepository(c.resolve(sessionmaker)),
        singleton=True,
    )
    container.register_factory(
        StudyFetcher,
        lambda c: StudyFetcher(
            c.resolve(Settings).STUDY_API_BASE_URL,
            timeout=c.resolve(Settings).REQUEST_TIMEOUT,
            transport=transport,
        ),
        singleton=True,
    )
    container.register_factory(
        StudyRepository,
        lambda c: StudyRepository(
            subject_repository=c.resolve(SubjectRepository),
            question_repository=c.resolve(QuestionRepository),
            fetcher=c.resolve(StudyFetcher),
            change_tracker=c.resolve(InvalidationTracker),
            subject_order=c.resolve(Settings).subject_sort_order,
            dispatcher=dispatcher,
        ),
        singleton=True,
    )
    return container


def shutdown_container(container: Container) -> None:
    """Stop the study repository and release the database, if they were built."""
    repository = container.resolved(StudyRepository)
    if repository is not None:
        repository.close()
    else:
        fetcher = container.resolved(StudyFetcher)
        if fetcher is not None:
            fetcher.close()

    engine = container.resolved(Engine)
    if engine is not None:
        dispose_engine(engine)
    logger.info("study_services_stopped")


class _ContainerRegistry:
    """
    Holds the application container.

    Using a class instead of module-level globals for cleaner state management.
    """

    _instance: Container | None = None
    _lock = threading.Lock()

    @classmethod
    def get(cls) -> Container:
        """Get the application container, building the default one if needed."""
        with cls._lock:
            if cls._instance is None:
                settings = get_settings()
                configure_logging(settings.ENVIRONMENT)
                cls._instance = build_container(settings)
            return cls._instance

    @classmethod
    def set(cls, container: Container | None) -> Container | None:
        """Replace the application container, returning the previous one."""
        with cls._lock:
            previous, cls._instance = cls._instance, container
            return previous


def get_container() -> Container:
    """Get the application container."""
    return _ContainerRegistry.get()


def set_container(container: Container) -> None:
    """
    Set the application container.

    Call this during application startup to configure dependencies.
    """
    _ContainerRegistry.set(container)


def reset_container() -> None:
    """
    Shut down and forget the application container.

    Useful for testing.
    """
    previous = _ContainerRegistry.set(None)
    if previous is not None:
        shutdown_container(previous)


def get_study_repository() -> StudyRepository:
    """The one StudyRepository of this process, built on first use."""
    return get_container().resolve(StudyRepository)
