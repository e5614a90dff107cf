"""Public domain model surface."""

from __future__ import annotations

from entitylink.domain.model.container import Container, ContainerGroup
from entitylink.domain.model.entity import Entity
from entitylink.domain.model.enums import Confidence, EntityType, RecordState
from entitylink.domain.model.fields import (
    ENTITY_TYPE,
    PLACEHOLDER_PARENT_METADATA_VALUE,
    RELATIONSHIP_TYPE,
    SOURCE_ID,
    TITLE,
    MetadataField,
)
from entitylink.domain.model.metadata import (
    FieldName,
    MetadataBearingMixin,
    MetadataValue,
    as_field,
)
from entitylink.domain.model.record import Record

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # metadata
    "FieldName",
    "MetadataBearingMixin",
    "MetadataField",
    "MetadataValue",
    "as_field",
    # well-known fields
    "ENTITY_TYPE",
    "PLACEHOLDER_PARENT_METADATA_VALUE",
    "RELATIONSHIP_TYPE",
    "SOURCE_ID",
    "TITLE",
    # records and containers
    "Record",
    "Container",
    "ContainerGroup",
    # enums
    "Confidence",
    "EntityType",
    "RecordState",
]
