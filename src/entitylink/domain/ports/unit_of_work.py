"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from entitylink.domain.authorization import AuthorizationState
    from entitylink.domain.ports.persistence import (
        ContainerGroupRepository,
        ContainerRepository,
        RecordRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""

TRepositories = TypeVar("TRepositories", bound=RepositoryCollection)


@runtime_checkable
class UnitOfWork(Protocol[TRepositories]):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    @property
    def authorization(self) -> AuthorizationState: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ResolutionRepositories(RepositoryCollection):
    """Repositories required to resolve authority-controlled metadata."""

    records: RecordRepository
    containers: ContainerRepository
    container_groups: ContainerGroupRepository


ResolutionUnitOfWork: TypeAlias = UnitOfWork[ResolutionRepositories]
