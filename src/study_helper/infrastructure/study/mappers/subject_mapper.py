"""Mapper for Subject ORM ↔ Domain conversion."""

from study_helper.domain.common.value_objects import SubjectId
from study_helper.domain.study.entities.subject import Subject
from study_helper.models import Subject as SubjectORM


class SubjectMapper:
    """Mapper for Subject ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: SubjectORM) -> Subject:
        """Convert ORM model to domain entity."""
        return Subject.create_with_id(
            id=SubjectId(orm_model.id),
            text=orm_model.text,
            update_time=orm_model.updated,
        )

    def to_orm(self, domain_entity: Subject, orm_model: SubjectORM | None = None) -> SubjectORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.text = domain_entity.text
            orm_model.updated = domain_entity.update_time
            return orm_model

        return SubjectORM(
            id=domain_entity.id.value if domain_entity.id.is_persisted else None,
            text=domain_entity.text,
            updated=domain_entity.update_time,
        )
