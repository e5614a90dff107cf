"""Resolve authority-controlled metadata of changed records to related records.

For every archived record handed to :meth:`ResolutionConsumer.consume`, each
metadata value of an authority-controlled field whose authority is blank or a
pending ``generate``/``reference`` token is linked to a related record:

* an existing record carrying the derived key is reused;
* otherwise a new record is created in the container found above the source
  record's own container, unless the value was an explicit reference, which
  is only ever matched, never created.

Resolved values get the related record id as authority and ACCEPTED confidence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from entitylink.domain.model import Confidence
from entitylink.domain.resolution.keys import (
    derive_key,
    is_authority_settled,
    is_blank,
    is_reference_authority,
)

if TYPE_CHECKING:
    from uuid import UUID

    from entitylink.config import ResolutionSettings
    from entitylink.domain.model import MetadataValue, Record
    from entitylink.domain.ports import AuthorityControl, EntityLookup, ResolutionUnitOfWork
    from entitylink.domain.resolution.builder import RelatedRecordBuilder
    from entitylink.domain.resolution.fillers import FillerRegistry
    from entitylink.domain.resolution.routing import ContainerRouter

log = logging.getLogger(__name__)

CONSUMER_NAME = "crisconsumer"


@dataclass(slots=True)
class ResolutionReport:
    """Counters for one dispatch cycle."""

    records: int = 0
    resolved: int = 0
    created: int = 0
    unresolved_references: int = 0
    unrouted: int = 0
    created_ids: list[UUID] = field(default_factory=list["UUID"])


class ResolutionConsumer:
    def __init__(  # noqa: PLR0913
        self,
        *,
        settings: ResolutionSettings,
        authority_control: AuthorityControl,
        entity_lookup: EntityLookup,
        router: ContainerRouter,
        builder: RelatedRecordBuilder,
        fillers: FillerRegistry,
    ) -> None:
        self.settings = settings
        self.authority_control = authority_control
        self.entity_lookup = entity_lookup
        self.router = router
        self.builder = builder
        self.fillers = fillers
        self._processed: set[UUID] = set()
        self.report = ResolutionReport()
        self.last_report: ResolutionReport | None = None

    @property
    def name(self) -> str:
        return CONSUMER_NAME

    def is_processed(self, record: Record) -> bool:
        return record.id in self._processed

    def consume(self, uow: ResolutionUnitOfWork, record: Record | None) -> None:
        if record is None or record.id in self._processed or not record.archived:
            return

        self._processed.add(record.id)
        self.report.records += 1

        with uow.authorization.elevated():
            self._consume_record(uow, record)

    def end(self, uow: ResolutionUnitOfWork) -> None:
        _ = uow
        self._processed.clear()
        self.last_report = self.report
        self.report = ResolutionReport()

    def finish(self, uow: ResolutionUnitOfWork) -> None:
        _ = uow

    def _consume_record(self, uow: ResolutionUnitOfWork, record: Record) -> None:
        # snapshot: filling a related record may add metadata to this very record
        for value in record.metadata:
            relationship_type = self._relationship_type_for(value)
            if relationship_type is None:
                continue
            self._resolve_value(uow, record, value, relationship_type)

    def _relationship_type_for(self, value: MetadataValue) -> str | None:
        """Return the relationship type if ``value`` still needs resolving."""

        authority = value.authority
        if value.is_placeholder or is_authority_settled(authority):
            return None
        if self.settings.skip_empty_authority and is_blank(authority):
            return None

        field_key = value.field_key
        if not self.authority_control.is_choices_configured(field_key):
            return None

        relationship_type = self.authority_control.get_relationship_type(field_key)
        if relationship_type is None:
            log.warning("No relationship.type found for field %s", field_key)
        return relationship_type

    def _resolve_value(
        self,
        uow: ResolutionUnitOfWork,
        record: Record,
        value: MetadataValue,
        relationship_type: str,
    ) -> None:
        key = derive_key(value, self.settings)
        related = self.entity_lookup.search(uow, key, relationship_type)
        already_present = related is not None

        if related is None and is_reference_authority(value.authority):
            log.warning("No related record found by authority %s", value.authority)
            value.confidence = Confidence.UNSET
            self.report.unresolved_references += 1
            return

        if related is None:
            container = self.router.find_container(record.owning_container, relationship_type)
            if container is None:
                log.warning(
                    "No container found with relationship.type = %s for record = %s. "
                    "No related record will be created.",
                    relationship_type,
                    record.id,
                )
                self.report.unrouted += 1
                return

            log.debug(
                "Creation of record with relationship.type = %s related to record %s",
                relationship_type,
                record.id,
            )
            related = self.builder.build(uow, record, container, value, relationship_type, key)
            self.report.created += 1
            self.report.created_ids.append(related.id)

        self.fillers.fill(uow, value, related, already_present=already_present)
        value.set_authority(str(related.id), Confidence.ACCEPTED)
        self.report.resolved += 1
