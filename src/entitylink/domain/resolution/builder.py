"""Create the related record for a metadata value that resolved to nothing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from entitylink.domain.model import SOURCE_ID, Record, RecordState

if TYPE_CHECKING:
    from entitylink.config import ResolutionSettings
    from entitylink.domain.model import Container, MetadataValue
    from entitylink.domain.ports import ResolutionUnitOfWork, WorkflowService

log = logging.getLogger(__name__)


class RelatedRecordBuilder:
    def __init__(self, settings: ResolutionSettings, workflow: WorkflowService) -> None:
        self.settings = settings
        self.workflow = workflow

    def build(  # noqa: PLR0913
        self,
        uow: ResolutionUnitOfWork,
        source: Record,
        container: Container,
        value: MetadataValue,
        relationship_type: str,
        key: str,
    ) -> Record:
        """Create a draft in ``container`` keyed by ``key`` and archive or submit it.

        The draft's identifier is fixed here, whichever path it takes afterwards.
        """

        draft = Record(
            state=RecordState.WORKSPACE,
            owning_container=container,
            submitter=source.submitter,
        )
        uow.repositories.records.add(draft)
        draft.add_metadata(SOURCE_ID, key)

        if not container.declares_relationship_type(relationship_type):
            log.error(
                "Inconsistent configuration: related record %s, created from %s (%s), "
                "is in container %s which lacks the expected [%s] relationship type",
                draft.id,
                source.id,
                value.metadata_field,
                container.id,
                relationship_type,
            )

        if self.settings.is_submission_enabled(value.field_key):
            self.workflow.install_directly(uow, draft)
            return draft
        return self.workflow.start(uow, draft)
