"""SQLAlchemy adapter package for entitylink."""

from __future__ import annotations

from .mappings import (
    CLASS_BY_ENTITY_TYPE,
    ENTITY_TYPE_BY_CLASS,
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyContainerGroupRepository,
    SqlAlchemyContainerRepository,
    SqlAlchemyEntityLookup,
    SqlAlchemyRecordRepository,
)
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    shutdown,
    startup,
)

__all__ = [
    "CLASS_BY_ENTITY_TYPE",
    "ENTITY_TYPE_BY_CLASS",
    "SqlAlchemyContainerGroupRepository",
    "SqlAlchemyContainerRepository",
    "SqlAlchemyEntityLookup",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
