"""Port for moving draft records into the archive."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from entitylink.domain.model import Record
    from entitylink.domain.ports.unit_of_work import ResolutionUnitOfWork


@runtime_checkable
class WorkflowService(Protocol):
    def start(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        """Run ``draft`` through the approval steps; return the resulting record."""
        ...

    def install_directly(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        """Archive ``draft`` immediately, skipping approval."""
        ...
