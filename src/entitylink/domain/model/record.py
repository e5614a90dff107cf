"""Content records (the items whose metadata gets resolved)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from entitylink.domain.model.enums import EntityType, RecordState
from entitylink.domain.model.metadata import MetadataBearingMixin

if TYPE_CHECKING:
    from entitylink.domain.model.container import Container


@dataclass(eq=False, kw_only=True)
class Record(MetadataBearingMixin):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.RECORD

    state: RecordState = RecordState.WORKSPACE
    owning_container: Container | None = None
    submitter: str | None = None

    @property
    def archived(self) -> bool:
        return self.state is RecordState.ARCHIVED

    def archive(self) -> None:
        self.state = RecordState.ARCHIVED

    def submit_for_approval(self) -> None:
        if self.state is not RecordState.WORKSPACE:
            raise ValueError(f"Only workspace records can enter the workflow (was {self.state})")
        self.state = RecordState.WORKFLOW
