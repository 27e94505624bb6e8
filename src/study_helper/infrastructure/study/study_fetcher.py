"""Remote question bank client."""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from study_helper.domain.common.exceptions import DomainError
from study_helper.domain.common.value_objects import SubjectId
from study_helper.domain.study.entities.question import Question
from study_helper.domain.study.entities.subject import Subject
from study_helper.exceptions import StudyFetchError
from study_helper.schemas import RemoteQuestion, RemoteSubject

logger = structlog.get_logger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)
ResultT = TypeVar("ResultT")

ErrorCallback = Callable[[StudyFetchError], None]


def _parse_array(
    payload: dict[str, Any], key: str, schema: type[PayloadT]
) -> list[tuple[int, PayloadT]]:
    """Validate each element of ``payload[key]``, skipping malformed ones."""
    elements = payload.get(key)
    if not isinstance(elements, list):
        logger.warning("missing_payload_array", key=key)
        return []

    parsed: list[tuple[int, PayloadT]] = []
    for index, element in enumerate(elements):
        try:
            parsed.append((index, schema.model_validate(element)))
        except PayloadValidationError as e:
            logger.warning(
                "skipped_malformed_element",
                key=key,
                index=index,
                errors=e.error_count(),
                fields=[".".join(str(part) for part in err["loc"]) for err in e.errors()],
            )
    return parsed


def parse_subjects(payload: dict[str, Any]) -> list[Subject]:
    """Convert a ``{"subjects": [...]}`` payload into unsaved subjects."""
    subjects: list[Subject] = []
    for index, remote in _parse_array(payload, "subjects", RemoteSubject):
        try:
            # Kept verbatim: the name is the lookup key for the subject's questions
            subjects.append(
                Subject.create_with_id(SubjectId.generate(), remote.subject, remote.updatetime)
            )
        except DomainError as e:
            logger.warning("skipped_malformed_subject", index=index, error=str(e))
    return subjects


def parse_questions(payload: dict[str, Any]) -> list[Question]:
    """Convert a ``{"questions": [...]}`` payload into unassigned questions."""
    return [
        Question.create(text=remote.question, answer=remote.answer)
        for _, remote in _parse_array(payload, "questions", RemoteQuestion)
    ]


class StudyFetcher:
    """HTTP client for the remote question bank.

    Blocking ``get_*`` calls return parsed lists or raise
    ``StudyFetchError``. The ``fetch_*`` calls run the same request on a
    small request pool and report through callbacks.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        max_workers: int = 4,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="study-fetch")

    def close(self) -> None:
        """Stop the request pool and close the HTTP client."""
        self._pool.shutdown(wait=True)
        self._client.close()

    def _request(self, params: dict[str, str]) -> dict[str, Any]:
        """GET the base URL with ``params`` and decode the JSON object body."""
        try:
            response = self._client.get(self.base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StudyFetchError(f"Request to {self.base_url} failed: {e!s}", cause=e) from e

        try:
            body = response.json()
        except ValueError as e:
            raise StudyFetchError("Response body is not valid JSON", cause=e) from e

        if not isinstance(body, dict):
            raise StudyFetchError("Response body is not a JSON object")
        return body

    # --- Blocking calls ---

    def get_subjects(self) -> list[Subject]:
        """Fetch the list of subjects offered by the question bank."""
        subjects = parse_subjects(self._request({"type": "subjects"}))
        logger.info("fetched_subjects", count=len(subjects))
        return subjects

    def get_questions(self, subject_name: str) -> list[Question]:
        """Fetch the questions of one subject, by display name."""
        questions = parse_questions(self._request({"type": "questions", "subject": subject_name}))
        logger.info("fetched_questions", subject=subject_name, count=len(questions))
        return questions

    # --- Callback calls ---

    def fetch_subjects(
        self,
        on_success: Callable[[list[Subject]], None],
        on_error: ErrorCallback,
    ) -> Future[None]:
        """Fetch subjects in the background and report through callbacks."""
        return self._pool.submit(self._deliver, self.get_subjects, on_success, on_error)

    def fetch_questions(
        self,
        subject: Subject,
        on_success: Callable[[Subject, list[Question]], None],
        on_error: ErrorCallback,
    ) -> Future[None]:
        """Fetch a subject's questions in the background and report through callbacks."""
        return self._pool.submit(
            self._deliver,
            lambda: self.get_questions(subject.text),
            lambda questions: on_success(subject, questions),
            on_error,
        )

    def _deliver(
        self,
        call: Callable[[], ResultT],
        on_success: Callable[[ResultT], None],
        on_error: ErrorCallback,
    ) -> None:
        try:
            result = call()
        except StudyFetchError as e:
            logger.warning("fetch_failed", url=self.base_url, error=e.message)
            on_error(e)
            return
        on_success(result)
