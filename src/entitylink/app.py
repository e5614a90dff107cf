"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Final

from entitylink.adapters.authority import ConfiguredAuthorityControl
from entitylink.adapters.sqlalchemy.repositories import SqlAlchemyEntityLookup
from entitylink.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from entitylink.adapters.workflow import BasicWorkflowService
from entitylink.config import ConfigurationProperties, ResolutionSettings
from entitylink.domain.custom_metadata import TemplatedMetadataConsumer
from entitylink.domain.events import Consumer, EventDispatcher
from entitylink.domain.ports.unit_of_work import ResolutionUnitOfWork
from entitylink.domain.resolution import (
    CONSUMER_NAME,
    ContainerRouter,
    FillerRegistry,
    RelatedRecordBuilder,
    ResolutionConsumer,
    ResolutionReport,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path
    from uuid import UUID

    from entitylink.domain.model import Record
    from entitylink.domain.ports import EntityLookup

UnitOfWorkFactory = Callable[[], ResolutionUnitOfWork]

CONSUMERS_PROPERTY: Final[str] = "event.dispatcher.default.consumers"

log = getLogger(__name__)


def load_properties(config_path: Path | None = None) -> ConfigurationProperties:
    """Read ``config_path``, or the file named by ``ENTITYLINK_CONFIG``."""

    if config_path is not None:
        return ConfigurationProperties.from_file(config_path)
    return ConfigurationProperties.from_environment()


def build_resolution_consumer(
    properties: ConfigurationProperties,
    fillers: FillerRegistry | None = None,
    *,
    entity_lookup: EntityLookup | None = None,
) -> ResolutionConsumer:
    """Wire the resolution consumer with the configuration-backed adapters."""

    settings = ResolutionSettings(properties)
    return ResolutionConsumer(
        settings=settings,
        authority_control=ConfiguredAuthorityControl(properties),
        entity_lookup=entity_lookup or SqlAlchemyEntityLookup(),
        router=ContainerRouter(),
        builder=RelatedRecordBuilder(settings, BasicWorkflowService(properties)),
        fillers=fillers or FillerRegistry(),
    )


def build_consumers(
    properties: ConfigurationProperties,
    resolution_consumer: ResolutionConsumer,
) -> list[Consumer]:
    """Return the consumers named in ``event.dispatcher.default.consumers``.

    The resolution consumer always runs first. Any other name is a templated
    metadata consumer configured under ``event.consumer.<name>``.
    """

    consumers: list[Consumer] = [resolution_consumer]
    for name in properties.get_array_property(CONSUMERS_PROPERTY):
        if name == CONSUMER_NAME:
            continue
        consumer = TemplatedMetadataConsumer(name, properties)
        if not consumer.enabled:
            log.warning("Consumer %s has no usable configuration and is skipped", name)
            continue
        consumers.append(consumer)
    return consumers


def resolve_archived_records(
    *,
    properties: ConfigurationProperties | None = None,
    record_ids: Sequence[UUID] | None = None,
    fillers: FillerRegistry | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ResolutionReport:
    """Run the configured consumers over archived records and commit the result."""

    effective_properties = properties or load_properties()
    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    resolution_consumer = build_resolution_consumer(effective_properties, fillers)
    dispatcher = EventDispatcher(build_consumers(effective_properties, resolution_consumer))

    with effective_uow() as uow:
        records = _select_records(uow, record_ids)
        log.info("Resolving authorities for %d records", len(records))
        dispatcher.dispatch(uow, records)
        dispatcher.finish(uow)
        uow.commit()

    report = resolution_consumer.last_report or ResolutionReport()
    log.info(
        "Finished resolution: records=%s, resolved=%s, created=%s, "
        "unresolved_references=%s, unrouted=%s",
        report.records,
        report.resolved,
        report.created,
        report.unresolved_references,
        report.unrouted,
    )
    return report


def _select_records(
    uow: ResolutionUnitOfWork,
    record_ids: Sequence[UUID] | None,
) -> list[Record]:
    if record_ids is None:
        return list(uow.repositories.records.list_archived())

    records: list[Record] = []
    for record_id in record_ids:
        record = uow.repositories.records.get(record_id)
        if record is None:
            log.warning("Record %s not found", record_id)
            continue
        records.append(record)
    return records


def init_database(database_uri: str | None = None) -> None:
    """Create the schema in the configured database."""

    startup(database_uri=database_uri, force=is_started())
    log.info("Database initialised")
