"""Metadata field names and well-known fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class MetadataField:
    schema: str
    element: str
    qualifier: str | None = None

    @classmethod
    def parse(cls, name: str, *, separator: str = ".") -> MetadataField:
        """Parse ``schema.element[.qualifier]`` into a field."""

        parts = name.strip().split(separator)
        if len(parts) == 2 and all(parts):  # noqa: PLR2004
            return cls(parts[0], parts[1])
        if len(parts) == 3 and all(parts):  # noqa: PLR2004
            return cls(parts[0], parts[1], parts[2])
        raise ValueError(f"Invalid metadata field name: {name!r}")

    def to_string(self, separator: str = ".") -> str:
        if self.qualifier is None:
            return separator.join((self.schema, self.element))
        return separator.join((self.schema, self.element, self.qualifier))

    @property
    def key(self) -> str:
        """Configuration key form, e.g. ``dc_contributor_author``."""
        return self.to_string("_")

    def __str__(self) -> str:
        return self.to_string()


SOURCE_ID: Final[MetadataField] = MetadataField("cris", "sourceId")
RELATIONSHIP_TYPE: Final[MetadataField] = MetadataField("relationship", "type")
TITLE: Final[MetadataField] = MetadataField("dc", "title")
ENTITY_TYPE: Final[MetadataField] = MetadataField("dspace", "entity", "type")

# Value of the parent entry in a nested (grouped) metadata set.
PLACEHOLDER_PARENT_METADATA_VALUE: Final[str] = "#PLACEHOLDER_PARENT_METADATA_VALUE#"
