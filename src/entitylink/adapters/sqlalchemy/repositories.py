"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from sqlalchemy import and_, exists, select
from sqlalchemy.orm import aliased

from entitylink.adapters.sqlalchemy.mappings import (
    container_table,
    metadata_value_table,
    record_table,
)
from entitylink.domain.model import (
    RELATIONSHIP_TYPE,
    SOURCE_ID,
    Container,
    ContainerGroup,
    EntityType,
    MetadataField,
    Record,
    RecordState,
)

if TYPE_CHECKING:
    import uuid
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session
    from sqlalchemy.sql.base import ReadOnlyColumnCollection

    from entitylink.domain.model import Entity
    from entitylink.domain.ports import ResolutionUnitOfWork

TEntity = TypeVar("TEntity", bound="Entity")


class SqlAlchemyRepository(Generic[TEntity]):
    """Shared add/get for repositories keyed by the entity UUID."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyRecordRepository(SqlAlchemyRepository[Record]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Record)

    def list_archived(self) -> Sequence[Record]:
        stmt = (
            select(Record)
            .where(record_table.c.state == RecordState.ARCHIVED)
            .order_by(record_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyContainerRepository(SqlAlchemyRepository[Container]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Container)


class SqlAlchemyContainerGroupRepository(SqlAlchemyRepository[ContainerGroup]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, ContainerGroup)


def _field_matches(
    columns: ReadOnlyColumnCollection[str, Any],
    metadata_field: MetadataField,
) -> ColumnElement[bool]:
    qualifier = (
        columns.qualifier.is_(None)
        if metadata_field.qualifier is None
        else columns.qualifier == metadata_field.qualifier
    )
    return and_(
        columns.schema == metadata_field.schema,
        columns.element == metadata_field.element,
        qualifier,
    )


class SqlAlchemyEntityLookup:
    """Find related records by their ``cris.sourceId`` key.

    A record matches when it carries the key and its owning container declares
    the requested relationship type. Pending (unflushed) records of the same
    session are found thanks to autoflush.
    """

    def search(
        self,
        uow: ResolutionUnitOfWork,
        key: str,
        relationship_type: str,
    ) -> Record | None:
        session = _session_of(uow)
        source_id = aliased(metadata_value_table)
        container_tag = aliased(metadata_value_table)

        tagged_container = exists().where(
            container_tag.c.owner_type == EntityType.CONTAINER,
            container_tag.c.owner_id == container_table.c.id,
            _field_matches(container_tag.c, RELATIONSHIP_TYPE),
            container_tag.c.value == relationship_type,
        )
        stmt = (
            select(Record)
            .join(
                source_id,
                and_(
                    source_id.c.owner_type == EntityType.RECORD,
                    source_id.c.owner_id == record_table.c.id,
                ),
            )
            .join(container_table, record_table.c.owning_container_id == container_table.c.id)
            .where(_field_matches(source_id.c, SOURCE_ID))
            .where(source_id.c.value == key)
            .where(tagged_container)
            .order_by(record_table.c.id)
            .limit(1)
        )
        return session.execute(stmt).scalars().first()


def _session_of(uow: ResolutionUnitOfWork) -> Session:
    session = getattr(uow, "session", None)
    if session is None:
        raise TypeError("SqlAlchemyEntityLookup requires a SQLAlchemy unit of work")
    return cast("Session", session)


if TYPE_CHECKING:
    from entitylink.domain.ports import (
        ContainerGroupRepository,
        ContainerRepository,
        EntityLookup,
        RecordRepository,
    )

    _session_stub = cast("Session", object())
    _record_repo: RecordRepository = SqlAlchemyRecordRepository(_session_stub)
    _container_repo: ContainerRepository = SqlAlchemyContainerRepository(_session_stub)
    _group_repo: ContainerGroupRepository = SqlAlchemyContainerGroupRepository(_session_stub)
    _lookup_check: EntityLookup = SqlAlchemyEntityLookup()
