"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EntityType(StrEnum):
    """Discriminator for metadata owners."""

    RECORD = "record"
    CONTAINER = "container"
    CONTAINER_GROUP = "container_group"


class RecordState(StrEnum):
    WORKSPACE = "workspace"
    WORKFLOW = "workflow"
    ARCHIVED = "archived"
    WITHDRAWN = "withdrawn"


class Confidence(IntEnum):
    """Authority confidence scale; higher means more trustworthy."""

    UNSET = -1
    NOVALUE = 0
    REJECTED = 100
    FAILED = 200
    NOTFOUND = 300
    AMBIGUOUS = 400
    UNCERTAIN = 500
    ACCEPTED = 600
