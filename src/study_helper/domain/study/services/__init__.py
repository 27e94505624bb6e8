"""Pure domain services for the study context."""

from .question_deck import QuestionDeck
from .subject_ordering import SubjectSortOrder, sort_subjects

__all__ = [
    "QuestionDeck",
    "SubjectSortOrder",
    "sort_subjects",
]
