from .change_tracker import ChangeTrackerProtocol
from .question_repository import QuestionRepositoryProtocol
from .study_fetcher import StudyFetcherProtocol
from .subject_repository import SubjectRepositoryProtocol

__all__ = [
    "ChangeTrackerProtocol",
    "QuestionRepositoryProtocol",
    "StudyFetcherProtocol",
    "SubjectRepositoryProtocol",
]
