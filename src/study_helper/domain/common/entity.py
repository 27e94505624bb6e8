"""
Base class for Entities.

Entities have an identity that runs through time. Two entities are equal
if they have the same identity, regardless of their attributes. Identity
is an integer assigned by the local store; ``0`` marks an entity that has
not been saved yet.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed, store-generated entity identifiers.

    Example:
        subject_id = SubjectId(42)
        question_id = QuestionId(42)
        # Different types, so they never compare equal
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be non-negative")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @property
    def is_persisted(self) -> bool:
        """Whether the store has assigned this id."""
        return self.value != 0

    @classmethod
    def generate(cls) -> Self:
        """Placeholder id; the store assigns the real one."""
        return cls(0)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Unsaved entities (id 0) have no identity yet, so they only compare
    equal to themselves.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if not self.id.is_persisted:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
