"""
Question entity: a text/answer pair belonging to one subject.
"""

from dataclasses import dataclass, replace

from study_helper.domain.common.entity import Entity
from study_helper.domain.common.value_objects import QuestionId, SubjectId


@dataclass(eq=False)
class Question(Entity[QuestionId]):
    """
    Question referencing its subject by id.

    Questions imported from the remote bank arrive with an unassigned
    subject (id 0) and are attached to the local subject before saving.
    """

    id: QuestionId
    text: str
    answer: str
    subject_id: SubjectId

    def edit(self, text: str, answer: str) -> None:
        """Replace question and answer text in place."""
        self.text = text
        self.answer = answer

    def assign_to(self, subject_id: SubjectId) -> None:
        """Attach this question to a subject."""
        self.subject_id = subject_id

    def with_id(self, question_id: QuestionId) -> "Question":
        """Copy of this question carrying a store-assigned id."""
        return replace(self, id=question_id)

    @classmethod
    def create(
        cls,
        text: str,
        answer: str,
        subject_id: SubjectId | None = None,
    ) -> "Question":
        """Create a new question (ID will be 0 until persisted)."""
        return cls(
            id=QuestionId.generate(),
            text=text,
            answer=answer,
            subject_id=subject_id if subject_id is not None else SubjectId.generate(),
        )

    @classmethod
    def create_with_id(
        cls,
        id: QuestionId,
        text: str,
        answer: str,
        subject_id: SubjectId,
    ) -> "Question":
        """Reconstitute a question from persistence."""
        return cls(id=id, text=text, answer=answer, subject_id=subject_id)
