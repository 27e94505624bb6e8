"""Repository for Question domain entities."""

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from study_helper.domain.common.value_objects import QuestionId, SubjectId
from study_helper.domain.study.entities.question import Question
from study_helper.infrastructure.study.mappers.question_mapper import QuestionMapper
from study_helper.models import Question as QuestionORM

logger = structlog.get_logger(__name__)


class QuestionRepository:
    """Repository for Question domain entities."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self.mapper = QuestionMapper()

    def find_by_id(self, question_id: QuestionId) -> Question | None:
        """Find a question by ID."""
        with self.session_factory() as session:
            orm_model = session.get(QuestionORM, question_id.value)
            return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_subject(self, subject_id: SubjectId) -> list[Question]:
        """
        Get all questions of a subject.

        Args:
            subject_id: The subject ID

        Returns:
            List of question entities ordered by ID
        """
        stmt = (
            select(QuestionORM)
            .where(QuestionORM.subject_id == subject_id.value)
            .order_by(QuestionORM.id)
        )
        with self.session_factory() as session:
            orm_models = session.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, question: Question) -> Question:
        """
        Save a question, replacing any row that already has its ID.

        Args:
            question: The question entity to save

        Returns:
            Saved question entity carrying the generated ID
        """
        with self.session_factory() as session:
            if question.id.is_persisted:
                orm_model = session.merge(self.mapper.to_orm(question))
            else:
                orm_model = self.mapper.to_orm(question)
                session.add(orm_model)
            session.commit()
            saved = self.mapper.to_domain(orm_model)

        logger.debug(
            "question_saved", question_id=saved.id.value, subject_id=saved.subject_id.value
        )
        return saved

    def update(self, question: Question) -> bool:
        """
        Update an existing question.

        Args:
            question: The question entity with new values

        Returns:
            True if updated, False if no row has that ID
        """
        with self.session_factory() as session:
            orm_model = session.get(QuestionORM, question.id.value)
            if not orm_model:
                logger.debug("question_update_skipped", question_id=question.id.value)
                return False

            self.mapper.to_orm(question, orm_model)
            session.commit()
        return True

    def delete(self, question_id: QuestionId) -> bool:
        """
        Delete a question.

        Args:
            question_id: The question ID

        Returns:
            True if deleted, False if not found
        """
        with self.session_factory() as session:
            orm_model = session.get(QuestionORM, question_id.value)
            if not orm_model:
                return False

            session.delete(orm_model)
            session.commit()
        return True
