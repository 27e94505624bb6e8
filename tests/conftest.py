"""Pytest configuration and fixtures."""

import json
import threading
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any, Generic, TypeVar

import httpx
import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from study_helper.application.study.study_repository import StudyRepository
from study_helper.config import Settings
from study_helper.database import (
    create_database_engine,
    create_schema,
    create_session_factory,
    dispose_engine,
)
from study_helper.infrastructure.study.invalidation import InvalidationTracker
from study_helper.infrastructure.study.repositories import QuestionRepository, SubjectRepository
from study_helper.infrastructure.study.study_fetcher import StudyFetcher

TEST_API_URL = "https://questions.test/study-helper.php"

# Generous upper bound for background work in tests
WAIT_SECONDS = 5.0

T = TypeVar("T")


class QuestionBank:
    """In-memory stand-in for the remote question bank, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.subjects: list[dict[str, Any]] = []
        self.questions: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.raw_body: bytes | None = None
        self.error: httpx.HTTPError | None = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)

        params = request.url.params
        if params.get("type") == "subjects":
            body: dict[str, Any] = {"subjects": self.subjects}
        elif params.get("type") == "questions":
            body = {"questions": self.questions.get(params.get("subject", ""), [])}
        else:
            body = {}
        return httpx.Response(
            self.status_code,
            content=json.dumps(body).encode(),
            headers={"Content-Type": "application/json"},
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class Recorder(Generic[T]):
    """Observable subscriber that records values and lets tests wait for them."""

    def __init__(self) -> None:
        self.values: list[T] = []
        self._condition = threading.Condition()

    def __call__(self, value: T) -> None:
        with self._condition:
            self.values.append(value)
            self._condition.notify_all()

    @property
    def last(self) -> T:
        with self._condition:
            return self.values[-1]

    def wait_for(
        self, predicate: Callable[[list[T]], bool], timeout: float = WAIT_SECONDS
    ) -> bool:
        with self._condition:
            return self._condition.wait_for(lambda: predicate(self.values), timeout=timeout)

    def wait_count(self, count: int, timeout: float = WAIT_SECONDS) -> bool:
        return self.wait_for(lambda values: len(values) >= count, timeout)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'study.db'}",
        STUDY_API_BASE_URL=TEST_API_URL,
        REQUEST_TIMEOUT=5.0,
        ENVIRONMENT="test",
        _env_file=None,
    )


@pytest.fixture
def engine(settings: Settings) -> Generator[Engine, None, None]:
    engine = create_database_engine(settings)
    create_schema(engine)
    yield engine
    dispose_engine(engine)


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture
def change_tracker(session_factory: sessionmaker[Session]) -> InvalidationTracker:
    return InvalidationTracker(session_factory)


@pytest.fixture
def subject_repository(session_factory: sessionmaker[Session]) -> SubjectRepository:
    return SubjectRepository(session_factory)


@pytest.fixture
def question_repository(session_factory: sessionmaker[Session]) -> QuestionRepository:
    return QuestionRepository(session_factory)


@pytest.fixture
def question_bank() -> QuestionBank:
    return QuestionBank()


@pytest.fixture
def fetcher(question_bank: QuestionBank) -> Generator[StudyFetcher, None, None]:
    fetcher = StudyFetcher(TEST_API_URL, timeout=5.0, transport=question_bank.transport())
    yield fetcher
    fetcher.close()


@pytest.fixture
def study_repository(
    subject_repository: SubjectRepository,
    question_repository: QuestionRepository,
    change_tracker: InvalidationTracker,
    question_bank: QuestionBank,
) -> Generator[StudyRepository, None, None]:
    """StudyRepository over a temporary store and the in-memory question bank."""
    repository = StudyRepository(
        subject_repository=subject_repository,
        question_repository=question_repository,
        fetcher=StudyFetcher(TEST_API_URL, timeout=5.0, transport=question_bank.transport()),
        change_tracker=change_tracker,
    )
    yield repository
    repository.close()
