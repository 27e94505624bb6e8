from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class SubjectId(EntityId):
    """Strongly-typed subject identifier."""

    value: int


@dataclass(frozen=True)
class QuestionId(EntityId):
    """Strongly-typed question identifier."""

    value: int
