"""Protocol for the Subject side of the local store."""

from typing import Protocol

from study_helper.domain.common.value_objects import SubjectId
from study_helper.domain.study.entities.subject import Subject
from study_helper.domain.study.services.subject_ordering import SubjectSortOrder


class SubjectRepositoryProtocol(Protocol):
    """Protocol for Subject repository operations."""

    def find_by_id(self, subject_id: SubjectId) -> Subject | None:
        """Find a subject by ID, None if absent."""
        ...

    def find_all(self, order: SubjectSortOrder = SubjectSortOrder.ALPHABETIC) -> list[Subject]:
        """
        Get all subjects.

        Args:
            order: Alphabetic (case-insensitive), newest first or oldest first

        Returns:
            List of subject entities in that order
        """
        ...

    def save(self, subject: Subject) -> Subject:
        """
        Save a subject, replacing any row with the same ID.

        Returns:
            Saved subject entity carrying the generated ID
        """
        ...

    def delete(self, subject_id: SubjectId) -> bool:
        """
        Delete a subject and every question that references it.

        Returns:
            True if deleted, False if not found
        """
        ...
