from .question import Question
from .subject import Subject, current_time_millis

__all__ = [
    "Question",
    "Subject",
    "current_time_millis",
]
