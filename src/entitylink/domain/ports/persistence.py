"""Ports for persisting and finding domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from entitylink.domain.model import Container, ContainerGroup, Record

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from entitylink.domain.ports.unit_of_work import ResolutionUnitOfWork

TEntity = TypeVar("TEntity")


@runtime_checkable
class Repository(Protocol[TEntity]):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class RecordRepository(Repository[Record], Protocol):
    """Persistence contract for records."""

    def list_archived(self) -> Sequence[Record]: ...


@runtime_checkable
class ContainerRepository(Repository[Container], Protocol):
    """Persistence contract for leaf containers."""


@runtime_checkable
class ContainerGroupRepository(Repository[ContainerGroup], Protocol):
    """Persistence contract for container groups."""


@runtime_checkable
class EntityLookup(Protocol):
    """Find an existing related record by its external key."""

    def search(
        self,
        uow: ResolutionUnitOfWork,
        key: str,
        relationship_type: str,
    ) -> Record | None:
        """Return the record carrying ``key`` for ``relationship_type``, if any.

        Records added earlier through the same unit of work must be visible.
        """
        ...
