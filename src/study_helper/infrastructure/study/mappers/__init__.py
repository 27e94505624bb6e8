from .question_mapper import QuestionMapper
from .subject_mapper import SubjectMapper

__all__ = ["QuestionMapper", "SubjectMapper"]
