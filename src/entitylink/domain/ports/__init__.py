"""Domain port definitions for adapters."""

from __future__ import annotations

from .authority import AuthorityControl
from .persistence import (
    ContainerGroupRepository,
    ContainerRepository,
    EntityLookup,
    RecordRepository,
    Repository,
)
from .unit_of_work import (
    RepositoryCollection,
    ResolutionRepositories,
    ResolutionUnitOfWork,
    UnitOfWork,
)
from .workflow import WorkflowService

__all__ = [
    "AuthorityControl",
    "ContainerGroupRepository",
    "ContainerRepository",
    "EntityLookup",
    "RecordRepository",
    "Repository",
    "RepositoryCollection",
    "ResolutionRepositories",
    "ResolutionUnitOfWork",
    "UnitOfWork",
    "WorkflowService",
]
