"""
Subject entity: a named topic grouping questions.
"""

import time
from dataclasses import dataclass, replace

from study_helper.domain.common.entity import Entity
from study_helper.domain.common.exceptions import ValidationError
from study_helper.domain.common.value_objects import SubjectId


def current_time_millis() -> int:
    """Wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(eq=False)
class Subject(Entity[SubjectId]):
    """
    Subject owning zero or more questions by foreign key.

    Business Rules:
    - Text cannot be empty
    - update_time is stamped once at creation and never changed afterwards
    """

    id: SubjectId
    text: str
    update_time: int

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.text or not self.text.strip():
            raise ValidationError("Subject text cannot be empty", field="text")

    def with_id(self, subject_id: SubjectId) -> "Subject":
        """Copy of this subject carrying a store-assigned id."""
        return replace(self, id=subject_id)

    @classmethod
    def create(cls, text: str, update_time: int | None = None) -> "Subject":
        """Create a new subject (ID will be 0 until persisted)."""
        return cls(
            id=SubjectId.generate(),
            text=text.strip(),
            update_time=current_time_millis() if update_time is None else update_time,
        )

    @classmethod
    def create_with_id(cls, id: SubjectId, text: str, update_time: int) -> "Subject":
        """Build a subject with its text exactly as stored or received."""
        return cls(id=id, text=text, update_time=update_time)
