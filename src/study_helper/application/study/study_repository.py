"""
Single coordination point between callers, the local store and the
remote question bank.

Every store mutation is queued on one ``WriteQueue``, so writes are
applied strictly in the order they were requested. Reads are
``LiveQuery`` observables that refresh after each committed write to
the tables they read. Commands return a Future the caller is free to
ignore.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import replace
from typing import Any, TypeVar

import structlog

from study_helper.application.common.observable import Dispatcher, LiveQuery, Observable
from study_helper.application.common.write_queue import WriteQueue
from study_helper.application.study.protocols import (
    ChangeTrackerProtocol,
    QuestionRepositoryProtocol,
    StudyFetcherProtocol,
    SubjectRepositoryProtocol,
)
from study_helper.domain.common.value_objects import QuestionId, SubjectId
from study_helper.domain.study.entities.question import Question
from study_helper.domain.study.entities.subject import Subject
from study_helper.domain.study.services.subject_ordering import SubjectSortOrder
from study_helper.exceptions import StudyFetchError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Store tables read by the live queries
SUBJECT_TABLE = "subject"
QUESTION_TABLE = "question"


class StudyRepository:
    """Synchronizes the local study store with the remote question bank."""

    def __init__(
        self,
        subject_repository: SubjectRepositoryProtocol,
        question_repository: QuestionRepositoryProtocol,
        fetcher: StudyFetcherProtocol,
        change_tracker: ChangeTrackerProtocol,
        subject_order: SubjectSortOrder = SubjectSortOrder.ALPHABETIC,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        """Initialize with the store repositories, fetcher and change tracker."""
        self.subject_repository = subject_repository
        self.question_repository = question_repository
        self.fetcher = fetcher
        self.change_tracker = change_tracker
        self._dispatcher = dispatcher
        self.subject_order = subject_order
        self._writes = WriteQueue()

        self.imported_subject: Observable[str] = Observable(dispatcher)
        self.fetched_subjects: Observable[list[Subject]] = Observable(dispatcher)
        self.fetch_errors: Observable[StudyFetchError] = Observable(dispatcher)

        self._undo_lock = threading.Lock()
        self._last_deleted_question: Question | None = None

        self._close_lock = threading.Lock()
        self._closed = False

    # --- Live reads ---

    def get_subject(self, subject_id: int) -> LiveQuery[Subject | None]:
        subject_id_vo = SubjectId(subject_id)
        return self._live(
            lambda: self.subject_repository.find_by_id(subject_id_vo), SUBJECT_TABLE
        )

    def get_subjects(self, order: SubjectSortOrder | None = None) -> LiveQuery[list[Subject]]:
        """All subjects, in ``order`` or the configured subject order."""
        order = order or self.subject_order
        return self._live(lambda: self.subject_repository.find_all(order), SUBJECT_TABLE)

    def get_question(self, question_id: int) -> LiveQuery[Question | None]:
        question_id_vo = QuestionId(question_id)
        return self._live(
            lambda: self.question_repository.find_by_id(question_id_vo), QUESTION_TABLE
        )

    def get_questions(self, subject_id: int) -> LiveQuery[list[Question]]:
        subject_id_vo = SubjectId(subject_id)
        return self._live(
            lambda: self.question_repository.find_by_subject(subject_id_vo), QUESTION_TABLE
        )

    def _live(self, query: Callable[[], T], *tables: str) -> LiveQuery[T]:
        return LiveQuery(
            query,
            tables,
            tracker=self.change_tracker,
            loader=self._writes.submit,
            dispatcher=self._dispatcher,
        )

    # --- Writes ---

    def _write(self, task: Callable[..., T], *args: Any) -> Future[T]:
        """Queue a store mutation, then let live queries see its tables."""

        def apply() -> T:
            try:
                return task(*args)
            finally:
                self.change_tracker.refresh()

        apply.__name__ = getattr(task, "__name__", "write")
        return self._writes.submit(apply)

    def add_subject(self, subject: Subject) -> Future[Subject]:
        """Queue saving a subject; the Future resolves to it with its generated id."""

        def add() -> Subject:
            saved = self.subject_repository.save(subject)
            logger.info("subject_added", subject_id=saved.id.value, text=saved.text)
            return saved

        return self._write(add)

    def create_subject(self, text: str) -> Future[Subject] | None:
        """
        Add a subject typed by the user.

        Input is trimmed; blank input is dropped without an error and
        returns None.
        """
        text = text.strip()
        if not text:
            return None
        return self.add_subject(Subject.create(text))

    def delete_subject(self, subject: Subject) -> Future[bool]:
        """Queue deleting a subject and every question under it."""

        def delete() -> bool:
            deleted = self.subject_repository.delete(subject.id)
            logger.info("subject_deleted", subject_id=subject.id.value, deleted=deleted)
            return deleted

        return self._write(delete)

    def add_question(self, question: Question) -> Future[Question]:
        def add() -> Question:
            saved = self.question_repository.save(question)
            logger.debug(
                "question_added", question_id=saved.id.value, subject_id=saved.subject_id.value
            )
            return saved

        return self._write(add)

    def update_question(self, question: Question) -> Future[bool]:
        """Queue an update; a question that no longer exists is left alone."""
        return self._write(self.question_repository.update, question)

    def delete_question(self, question: Question) -> Future[bool]:
        """Queue deleting a question, remembering it for one undo."""
        with self._undo_lock:
            self._last_deleted_question = replace(question)

        def delete() -> bool:
            deleted = self.question_repository.delete(question.id)
            logger.info("question_deleted", question_id=question.id.value, deleted=deleted)
            return deleted

        return self._write(delete)

    def undo_delete_question(self) -> Future[Question] | None:
        """Re-add the last deleted question; None if there is nothing to undo."""
        with self._undo_lock:
            question, self._last_deleted_question = self._last_deleted_question, None
        if question is None:
            return None
        logger.info("question_delete_undone", question_id=question.id.value)
        return self.add_question(question)

    # --- Remote ---

    def fetch_subjects(self) -> Future[None]:
        """Fetch the remote subject list and publish it on ``fetched_subjects``."""
        return self.fetcher.fetch_subjects(self.fetched_subjects.publish, self._on_fetch_error)

    def fetch_questions(self, subject: Subject) -> Future[None]:
        """Fetch a saved subject's remote questions and store them under it."""
        return self.fetcher.fetch_questions(
            subject, self._on_questions_received, self._on_fetch_error
        )

    def import_subject(self, subject: Subject) -> Future[Subject]:
        """
        Save a subject, then fill it with its questions from the remote bank.

        The remote fetch starts only once the subject has its generated id.
        ``imported_subject`` publishes the subject's text after all of its
        questions have been stored.
        """
        saved = self.add_subject(subject)
        saved.add_done_callback(self._fetch_for_import)
        return saved

    def _fetch_for_import(self, saved: Future[Subject]) -> None:
        if saved.exception() is not None:
            return
        subject = saved.result()
        try:
            self.fetch_questions(subject)
        except RuntimeError as e:
            # Runs as a Future callback, where a raised error would be dropped
            self._on_fetch_error(
                StudyFetchError(f"Could not start question fetch for {subject.text!r}", cause=e)
            )

    def _on_questions_received(self, subject: Subject, questions: list[Question]) -> None:
        for question in questions:
            question.assign_to(subject.id)
            self.add_question(question)

        def announce() -> None:
            logger.info("subject_imported", subject_id=subject.id.value, questions=len(questions))
            self.imported_subject.publish(subject.text)

        self._writes.submit(announce)

    def _on_fetch_error(self, error: StudyFetchError) -> None:
        logger.error("fetch_failed", error=error.message, cause=repr(error.cause))
        self.fetch_errors.publish(error)

    # --- Lifecycle ---

    def wait_idle(self, timeout: float | None = None) -> None:
        """
        Block until every write queued so far has been applied.

        Called from a subscriber running on the write worker it returns at
        once instead of waiting on itself.
        """
        self._writes.wait_idle(timeout)

    def close(self) -> None:
        """
        Finish queued writes and in-flight fetches, then stop.

        Queued imports still start their question fetch, and the questions
        those fetches return are stored before the worker stops. Closing
        twice is a no-op.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        # Writes first: a pending import save starts its fetch when it completes
        self._writes.wait_idle()
        self.fetcher.close()
        self._writes.shutdown(wait=True)
        logger.debug("study_repository_closed")
