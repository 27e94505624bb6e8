"""Repository for Subject domain entities."""

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from study_helper.domain.common.value_objects import SubjectId
from study_helper.domain.study.entities.subject import Subject
from study_helper.domain.study.services.subject_ordering import SubjectSortOrder
from study_helper.infrastructure.study.mappers.subject_mapper import SubjectMapper
from study_helper.models import Question as QuestionORM
from study_helper.models import Subject as SubjectORM

logger = structlog.get_logger(__name__)

_TEXT_NOCASE = func.lower(SubjectORM.text)

_ORDER_BY = {
    SubjectSortOrder.ALPHABETIC: (
        _TEXT_NOCASE,
        SubjectORM.text,
        SubjectORM.updated,
        SubjectORM.id,
    ),
    SubjectSortOrder.NEW_FIRST: (
        SubjectORM.updated.desc(),
        _TEXT_NOCASE,
        SubjectORM.text,
        SubjectORM.id,
    ),
    SubjectSortOrder.OLD_FIRST: (
        SubjectORM.updated,
        _TEXT_NOCASE,
        SubjectORM.text,
        SubjectORM.id,
    ),
}


class SubjectRepository:
    """Repository for Subject domain entities."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self.mapper = SubjectMapper()

    def find_by_id(self, subject_id: SubjectId) -> Subject | None:
        """
        Find a subject by ID.

        Args:
            subject_id: The subject ID

        Returns:
            Subject entity if found, None otherwise
        """
        with self.session_factory() as session:
            orm_model = session.get(SubjectORM, subject_id.value)
            return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self, order: SubjectSortOrder = SubjectSortOrder.ALPHABETIC) -> list[Subject]:
        """
        Get all subjects.

        Args:
            order: Requested ordering

        Returns:
            List of subject entities in that order
        """
        stmt = select(SubjectORM).order_by(*_ORDER_BY[order])
        with self.session_factory() as session:
            orm_models = session.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, subject: Subject) -> Subject:
        """
        Save a subject, replacing any row that already has its ID.

        Args:
            subject: The subject entity to save

        Returns:
            Saved subject entity carrying the generated ID
        """
        with self.session_factory() as session:
            if subject.id.is_persisted:
                orm_model = session.merge(self.mapper.to_orm(subject))
            else:
                orm_model = self.mapper.to_orm(subject)
                session.add(orm_model)
            session.commit()
            saved = self.mapper.to_domain(orm_model)

        logger.debug("subject_saved", subject_id=saved.id.value)
        return saved

    def delete(self, subject_id: SubjectId) -> bool:
        """
        Delete a subject together with all of its questions.

        Args:
            subject_id: The subject ID

        Returns:
            True if deleted, False if not found
        """
        with self.session_factory() as session:
            orm_model = session.get(SubjectORM, subject_id.value)
            if not orm_model:
                return False

            session.execute(delete(QuestionORM).where(QuestionORM.subject_id == subject_id.value))
            session.delete(orm_model)
            session.commit()

        logger.debug("subject_deleted", subject_id=subject_id.value)
        return True
