"""Metadata values owned by typed references.

Important: MetadataValue points to (owner_type, owner_id), not to a concrete FK.
Records, containers and container groups all carry metadata the same way.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from entitylink.domain.model.entity import Entity, new_id
from entitylink.domain.model.enums import Confidence
from entitylink.domain.model.fields import PLACEHOLDER_PARENT_METADATA_VALUE, MetadataField

if TYPE_CHECKING:
    from uuid import UUID

    from entitylink.domain.model.enums import EntityType


FieldName: TypeAlias = str | MetadataField


def as_field(name: FieldName) -> MetadataField:
    return name if isinstance(name, MetadataField) else MetadataField.parse(name)


@dataclass(eq=False, kw_only=True)
class MetadataValue:
    id: UUID = field(default_factory=new_id)

    metadata_field: MetadataField
    value: str
    authority: str | None = None
    confidence: Confidence = Confidence.UNSET
    place: int = 0

    owner_type: EntityType
    owner_id: UUID

    @property
    def field_key(self) -> str:
        return self.metadata_field.key

    @property
    def is_placeholder(self) -> bool:
        """Structural parent entry of a nested metadata group."""
        return self.value == PLACEHOLDER_PARENT_METADATA_VALUE

    def set_authority(self, authority: str | None, confidence: Confidence) -> None:
        self.authority = authority
        self.confidence = confidence


@dataclass(eq=False, kw_only=True)
class MetadataBearingMixin(Entity, ABC):
    """Capability: owns an ordered list of metadata values."""

    _metadata: list[MetadataValue] = field(
        default_factory=list["MetadataValue"], repr=False, init=False
    )

    @property
    def metadata(self) -> tuple[MetadataValue, ...]:
        return tuple(self._metadata)

    def metadata_for(self, name: FieldName) -> tuple[MetadataValue, ...]:
        target = as_field(name)
        values = [value for value in self._metadata if value.metadata_field == target]
        return tuple(sorted(values, key=lambda value: value.place))

    def first_value(self, name: FieldName) -> str | None:
        values = self.metadata_for(name)
        return values[0].value if values else None

    def has_metadata_value(self, name: FieldName, value: str) -> bool:
        return any(existing.value == value for existing in self.metadata_for(name))

    def add_metadata(
        self,
        name: FieldName,
        value: str,
        *,
        authority: str | None = None,
        confidence: Confidence = Confidence.UNSET,
    ) -> MetadataValue:
        target = as_field(name)
        place = len(self.metadata_for(target))
        metadata_value = MetadataValue(
            metadata_field=target,
            value=value,
            authority=authority,
            confidence=confidence,
            place=place,
            owner_type=self.entity_type,
            owner_id=self.id,
        )
        self._metadata.append(metadata_value)
        return metadata_value

    def clear_metadata(self, name: FieldName) -> None:
        target = as_field(name)
        self._metadata[:] = [
            value for value in self._metadata if value.metadata_field != target
        ]
