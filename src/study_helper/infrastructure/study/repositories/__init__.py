"""SQLAlchemy-backed local store repositories."""

from .question_repository import QuestionRepository
from .subject_repository import SubjectRepository

__all__ = ["QuestionRepository", "SubjectRepository"]
