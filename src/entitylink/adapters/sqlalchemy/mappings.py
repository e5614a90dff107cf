"""SQLAlchemy mapping metadata for the entitylink domain model."""

from __future__ import annotations

import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Column,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    and_,
    orm,
)
from sqlalchemy.orm import composite, configure_mappers, relationship

from entitylink.domain.model import (
    Confidence,
    Container,
    ContainerGroup,
    EntityType,
    MetadataField,
    MetadataValue,
    Record,
    RecordState,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from entitylink.domain.model import MetadataBearingMixin

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class ConfidenceType(TypeDecorator[Confidence]):
    """Store confidences as their numeric score."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: Confidence | int | None, dialect: Dialect) -> int | None:
        _ = dialect
        if value is None:
            return None
        return int(value)

    def process_result_value(self, value: int | None, dialect: Dialect) -> Confidence | None:
        _ = dialect
        if value is None:
            return None
        return Confidence(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

container_table = Table(
    "container",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

container_group_table = Table(
    "container_group",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

# Link rows keep an integer id so children come back in the order they were linked.
container_group_container_table = Table(
    "container_group_container",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "group_id",
        UUIDColumnType,
        ForeignKey("container_group.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "container_id",
        UUIDColumnType,
        ForeignKey("container.id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("group_id", "container_id"),
)

container_group_subgroup_table = Table(
    "container_group_subgroup",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "parent_id",
        UUIDColumnType,
        ForeignKey("container_group.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "child_id",
        UUIDColumnType,
        ForeignKey("container_group.id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("parent_id", "child_id"),
)

record_table = Table(
    "record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("state", Enum(RecordState, native_enum=False), nullable=False),
    Column(
        "owning_container_id",
        UUIDColumnType,
        ForeignKey("container.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("submitter", String, nullable=True),
)

metadata_value_table = Table(
    "metadata_value",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("schema", String, nullable=False),
    Column("element", String, nullable=False),
    Column("qualifier", String, nullable=True),
    Column("value", Text, nullable=False),
    Column("authority", String, nullable=True),
    Column("confidence", ConfidenceType(), nullable=False, default=Confidence.UNSET),
    Column("place", Integer, nullable=False, default=0),
    Column("owner_type", Enum(EntityType, native_enum=False), nullable=False),
    Column("owner_id", UUIDColumnType, nullable=False),
    Index("ix_metadata_value_owner", "owner_type", "owner_id"),
    Index("ix_metadata_value_field_value", "schema", "element", "qualifier", "value"),
)

ENTITY_TYPE_BY_CLASS: Final[dict[type[MetadataBearingMixin], EntityType]] = {
    Record: EntityType.RECORD,
    Container: EntityType.CONTAINER,
    ContainerGroup: EntityType.CONTAINER_GROUP,
}

CLASS_BY_ENTITY_TYPE: Final[dict[EntityType, type[MetadataBearingMixin]]] = {
    value: key for key, value in ENTITY_TYPE_BY_CLASS.items()
}


def _metadata_relationship(
    entity_table: Table, entity_type: EntityType
) -> orm.RelationshipProperty[MetadataValue]:
    return relationship(
        MetadataValue,
        cascade="all, delete-orphan",
        primaryjoin=and_(
            metadata_value_table.c.owner_id == entity_table.c.id,
            metadata_value_table.c.owner_type == entity_type,
        ),
        foreign_keys=[metadata_value_table.c.owner_id],
        order_by=[
            metadata_value_table.c.schema,
            metadata_value_table.c.element,
            metadata_value_table.c.qualifier,
            metadata_value_table.c.place,
        ],
        overlaps="_metadata",
    )


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        MetadataValue,
        metadata_value_table,
        properties={
            "metadata_field": composite(
                MetadataField,
                metadata_value_table.c.schema,
                metadata_value_table.c.element,
                metadata_value_table.c.qualifier,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Container,
        container_table,
        properties={
            "_metadata": _metadata_relationship(container_table, EntityType.CONTAINER),
            "_parent_groups": relationship(
                ContainerGroup,
                secondary=container_group_container_table,
                back_populates="_containers",
                order_by=container_group_container_table.c.id,
            ),
        },
    )

    mapper_registry.map_imperatively(
        ContainerGroup,
        container_group_table,
        properties={
            "_metadata": _metadata_relationship(
                container_group_table,
                EntityType.CONTAINER_GROUP,
            ),
            "_containers": relationship(
                Container,
                secondary=container_group_container_table,
                back_populates="_parent_groups",
                order_by=container_group_container_table.c.id,
            ),
            "_subgroups": relationship(
                ContainerGroup,
                secondary=container_group_subgroup_table,
                primaryjoin=container_group_table.c.id
                == container_group_subgroup_table.c.parent_id,
                secondaryjoin=container_group_table.c.id
                == container_group_subgroup_table.c.child_id,
                back_populates="_parent_groups",
                order_by=container_group_subgroup_table.c.id,
            ),
            "_parent_groups": relationship(
                ContainerGroup,
                secondary=container_group_subgroup_table,
                primaryjoin=container_group_table.c.id
                == container_group_subgroup_table.c.child_id,
                secondaryjoin=container_group_table.c.id
                == container_group_subgroup_table.c.parent_id,
                back_populates="_subgroups",
                order_by=container_group_subgroup_table.c.id,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Record,
        record_table,
        properties={
            "_metadata": _metadata_relationship(record_table, EntityType.RECORD),
            "owning_container": relationship(Container),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
