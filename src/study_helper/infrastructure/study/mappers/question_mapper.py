"""Mapper for Question ORM ↔ Domain conversion."""

from study_helper.domain.common.value_objects import QuestionId, SubjectId
from study_helper.domain.study.entities.question import Question
from study_helper.models import Question as QuestionORM


class QuestionMapper:
    """Mapper for Question ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: QuestionORM) -> Question:
        """Convert ORM model to domain entity."""
        return Question.create_with_id(
            id=QuestionId(orm_model.id),
            text=orm_model.text,
            answer=orm_model.answer,
            subject_id=SubjectId(orm_model.subject_id),
        )

    def to_orm(
        self, domain_entity: Question, orm_model: QuestionORM | None = None
    ) -> QuestionORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.text = domain_entity.text
            orm_model.answer = domain_entity.answer
            orm_model.subject_id = domain_entity.subject_id.value
            return orm_model

        return QuestionORM(
            id=domain_entity.id.value if domain_entity.id.is_persisted else None,
            text=domain_entity.text,
            answer=domain_entity.answer,
            subject_id=domain_entity.subject_id.value,
        )
