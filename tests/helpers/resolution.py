"""Reusable fakes and builders for authority resolution tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Literal, TypeVar

from entitylink.config import ConfigurationProperties, ResolutionSettings
from entitylink.domain.authorization import AuthorizationState
from entitylink.domain.model import (
    SOURCE_ID,
    Container,
    ContainerGroup,
    Record,
    RecordState,
)
from entitylink.domain.ports import ResolutionRepositories
from entitylink.domain.resolution import (
    ContainerRouter,
    FillerRegistry,
    RelatedRecordBuilder,
    ResolutionConsumer,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from uuid import UUID

    from entitylink.domain.model import Entity, MetadataValue
    from entitylink.domain.ports import ResolutionUnitOfWork

TEntity = TypeVar("TEntity", bound="Entity")


class FakeRepository(Generic[TEntity]):
    """Simple in-memory repository keyed by entity id."""

    def __init__(self, initial: Iterable[TEntity] | None = None) -> None:
        self.items: list[TEntity] = list(initial or [])

    def add(self, entity: TEntity) -> None:
        if entity not in self.items:
            self.items.append(entity)

    def get(self, entity_id: UUID) -> TEntity | None:
        return next((item for item in self.items if item.id == entity_id), None)


class FakeRecordRepository(FakeRepository[Record]):
    def list_archived(self) -> Sequence[Record]:
        return [item for item in self.items if item.archived]


class FakeUnitOfWork:
    """Unit of work over in-memory repositories."""

    def __init__(
        self,
        records: Iterable[Record] | None = None,
        containers: Iterable[Container] | None = None,
        groups: Iterable[ContainerGroup] | None = None,
    ) -> None:
        self.repositories = ResolutionRepositories(
            records=FakeRecordRepository(records),
            containers=FakeRepository[Container](containers),
            container_groups=FakeRepository[ContainerGroup](groups),
        )
        self.authorization = AuthorizationState()
        self.committed = False
        self.rollback_called = False

    @property
    def records(self) -> FakeRecordRepository:
        repository = self.repositories.records
        assert isinstance(repository, FakeRecordRepository)
        return repository

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rollback_called = True


class FakeEntityLookup:
    """Scan the unit of work's records for a matching ``cris.sourceId``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def search(
        self,
        uow: ResolutionUnitOfWork,
        key: str,
        relationship_type: str,
    ) -> Record | None:
        self.calls.append((key, relationship_type))
        repository = uow.repositories.records
        assert isinstance(repository, FakeRecordRepository)
        for record in repository.items:
            container = record.owning_container
            if (
                record.has_metadata_value(SOURCE_ID, key)
                and container is not None
                and container.declares_relationship_type(relationship_type)
            ):
                return record
        return None


class FakeAuthorityControl:
    """Authority configuration as a plain ``field_key -> relationship type`` map.

    A key mapped to ``None`` is authority controlled without a relationship type.
    """

    def __init__(self, relationship_types: Mapping[str, str | None]) -> None:
        self.relationship_types = dict(relationship_types)

    def is_choices_configured(self, field_key: str) -> bool:
        return field_key in self.relationship_types

    def get_relationship_type(self, field_key: str) -> str | None:
        return self.relationship_types.get(field_key)


class RecordingWorkflow:
    """Workflow double remembering which path each draft took."""

    def __init__(self) -> None:
        self.installed: list[Record] = []
        self.started: list[Record] = []

    def start(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        _ = uow
        draft.state = RecordState.WORKFLOW
        self.started.append(draft)
        return draft

    def install_directly(self, uow: ResolutionUnitOfWork, draft: Record) -> Record:
        _ = uow
        draft.archive()
        self.installed.append(draft)
        return draft


class RecordingFiller:
    """Filler double that writes a marker field and records its calls."""

    def __init__(self, *, allow_update: bool = False) -> None:
        self.allow_update = allow_update
        self.filled: list[tuple[MetadataValue, Record]] = []

    def allows_update(
        self,
        uow: ResolutionUnitOfWork,
        value: MetadataValue,
        target: Record,
    ) -> bool:
        _ = (uow, value, target)
        return self.allow_update

    def fill(self, uow: ResolutionUnitOfWork, value: MetadataValue, target: Record) -> None:
        _ = uow
        self.filled.append((value, target))
        target.add_metadata("crisrp.name", value.value)


if TYPE_CHECKING:
    from entitylink.domain.ports import AuthorityControl, EntityLookup, WorkflowService
    from entitylink.domain.resolution import FieldFiller

    _uow_check: ResolutionUnitOfWork = FakeUnitOfWork()
    _lookup_check: EntityLookup = FakeEntityLookup()
    _authority_check: AuthorityControl = FakeAuthorityControl({})
    _workflow_check: WorkflowService = RecordingWorkflow()
    _filler_check: FieldFiller = RecordingFiller()


def make_properties(values: Mapping[str, str] | None = None) -> ConfigurationProperties:
    return ConfigurationProperties.from_mapping(values or {})


def make_archived_record(
    container: Container | None = None,
    *,
    submitter: str | None = "submitter@example.org",
) -> Record:
    return Record(state=RecordState.ARCHIVED, owning_container=container, submitter=submitter)


def make_hierarchy(
    relationship_type: str = "Person",
) -> tuple[Container, Container, ContainerGroup]:
    """Return ``(publications, people, group)``: two sibling containers in one group."""

    group = ContainerGroup(name="Research outputs")
    publications = group.create_container("Publications", relationship_type="Publication")
    people = group.create_container("People", relationship_type=relationship_type)
    return publications, people, group


def make_consumer(
    relationship_types: Mapping[str, str | None],
    *,
    properties: Mapping[str, str] | None = None,
    workflow: RecordingWorkflow | None = None,
    fillers: FillerRegistry | None = None,
    lookup: FakeEntityLookup | None = None,
) -> ResolutionConsumer:
    settings = ResolutionSettings(make_properties(properties))
    return ResolutionConsumer(
        settings=settings,
        authority_control=FakeAuthorityControl(relationship_types),
        entity_lookup=lookup or FakeEntityLookup(),
        router=ContainerRouter(),
        builder=RelatedRecordBuilder(settings, workflow or RecordingWorkflow()),
        fillers=fillers or FillerRegistry(),
    )
