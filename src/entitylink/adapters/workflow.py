"""Minimal workflow: drafts are either archived at once or parked for approval."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from entitylink.config import ConfigurationProperties
    from entitylink.domain.model import Record
    from entitylink.domain.ports import ResolutionUnitOfWork

log = logging.getLogger(__name__)

AUTO_APPROVE: Final[str] = "workflow.auto-approve"


class BasicWorkflowService:
    def __init__(self, properties: ConfigurationProperties) -> None:
        self.properties = properties

    def install_directly(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        _ = uow
        draft.archive()
        log.debug("Installed record %s", draft.id)
        return draft

    def start(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        draft.submit_for_approval()
        if self.properties.get_boolean_property(AUTO_APPROVE, default=False):
            return self.install_directly(uow, draft)
        log.debug("Record %s is awaiting approval", draft.id)
        return draft


if TYPE_CHECKING:
    from entitylink.config import ConfigurationProperties as _Properties
    from entitylink.domain.ports import WorkflowService

    _workflow_check: WorkflowService = BasicWorkflowService(_Properties())
