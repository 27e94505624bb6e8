"""Common value objects shared across the study domain."""

from .ids import QuestionId, SubjectId

__all__ = [
    "QuestionId",
    "SubjectId",
]
