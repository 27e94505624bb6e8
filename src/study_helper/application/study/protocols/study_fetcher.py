"""Protocol for the remote question bank."""

from collections.abc import Callable
from concurrent.futures import Future
from typing import Protocol

from study_helper.domain.study.entities.question import Question
from study_helper.domain.study.entities.subject import Subject
from study_helper.exceptions import StudyFetchError


class StudyFetcherProtocol(Protocol):
    """Callback-style access to the remote subject and question lists."""

    def fetch_subjects(
        self,
        on_success: Callable[[list[Subject]], None],
        on_error: Callable[[StudyFetchError], None],
    ) -> Future[None]: ...

    def fetch_questions(
        self,
        subject: Subject,
        on_success: Callable[[Subject, list[Question]], None],
        on_error: Callable[[StudyFetchError], None],
    ) -> Future[None]: ...

    def close(self) -> None: ...
