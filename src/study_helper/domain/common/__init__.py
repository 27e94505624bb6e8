"""Building blocks shared by every domain module."""

from .entity import Entity, EntityId
from .exceptions import DomainError, ValidationError
from .value_object import ValueObject

__all__ = [
    "DomainError",
    "Entity",
    "EntityId",
    "ValidationError",
    "ValueObject",
]
