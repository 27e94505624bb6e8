"""Protocol for the Question side of the local store."""

from typing import Protocol

from study_helper.domain.common.value_objects import QuestionId, SubjectId
from study_helper.domain.study.entities.question import Question


class QuestionRepositoryProtocol(Protocol):
    """Protocol for Question repository operations."""

    def find_by_id(self, question_id: QuestionId) -> Question | None:
        """Find a question by ID, None if absent."""
        ...

    def find_by_subject(self, subject_id: SubjectId) -> list[Question]:
        """Get a subject's questions ordered by ID."""
        ...

    def save(self, question: Question) -> Question:
        """
        Save a question, replacing any row with the same ID.

        Returns:
            Saved question entity carrying the generated ID
        """
        ...

    def update(self, question: Question) -> bool:
        """
        Update a question by ID.

        Returns:
            True if updated, False if no row has that ID
        """
        ...

    def delete(self, question_id: QuestionId) -> bool:
        """
        Delete a question by ID.

        Returns:
            True if deleted, False if not found
        """
        ...
