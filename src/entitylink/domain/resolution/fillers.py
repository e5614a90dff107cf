"""Fill resolved related records with metadata derived from the source value."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from entitylink.domain.model import TITLE, EntityType, as_field

if TYPE_CHECKING:
    from collections.abc import Mapping

    from entitylink.domain.model import FieldName, MetadataField, MetadataValue, Record
    from entitylink.domain.ports import ResolutionUnitOfWork

log = logging.getLogger(__name__)


@runtime_checkable
class FieldFiller(Protocol):
    def allows_update(
        self,
        uow: ResolutionUnitOfWork,
        value: MetadataValue,
        target: Record,
    ) -> bool:
        """Whether an already existing ``target`` may be filled again."""
        ...

    def fill(self, uow: ResolutionUnitOfWork, value: MetadataValue, target: Record) -> None: ...


class FillerRegistry:
    """Fillers keyed by the dotted name of the source field.

    Fields without a filler (or whose filler refuses to update an existing
    record) get the value text written to ``default_field``.
    """

    def __init__(
        self,
        fillers: Mapping[FieldName, FieldFiller] | None = None,
        *,
        default_field: FieldName = TITLE,
    ) -> None:
        self._fillers: dict[MetadataField, FieldFiller] = {
            as_field(name): filler for name, filler in (fillers or {}).items()
        }
        self.default_field = as_field(default_field)

    def register(self, name: FieldName, filler: FieldFiller) -> None:
        self._fillers[as_field(name)] = filler

    def get_filler(self, value: MetadataValue) -> FieldFiller | None:
        return self._fillers.get(value.metadata_field)

    def fill(
        self,
        uow: ResolutionUnitOfWork,
        value: MetadataValue,
        target: Record,
        *,
        already_present: bool,
    ) -> None:
        filler = self.get_filler(value)
        if filler is not None and (
            not already_present or filler.allows_update(uow, value, target)
        ):
            filler.fill(uow, value, target)
            return
        target.add_metadata(self.default_field, value.value)


class MetadataMappingFiller:
    """Copy metadata from the source record onto the related record.

    ``mappings`` maps target fields to source fields. A source field equal to the
    resolved value's own field yields the value text; any other source field is
    read from the source record at the same place, i.e. from the same entry of a
    nested metadata group (an author's affiliation next to the author).
    """

    def __init__(
        self,
        mappings: Mapping[FieldName, FieldName],
        *,
        update_enabled: bool = False,
    ) -> None:
        self.mappings: dict[MetadataField, MetadataField] = {
            as_field(target): as_field(source) for target, source in mappings.items()
        }
        self.update_enabled = update_enabled

    def allows_update(
        self,
        uow: ResolutionUnitOfWork,
        value: MetadataValue,
        target: Record,
    ) -> bool:
        _ = (uow, value, target)
        return self.update_enabled

    def fill(self, uow: ResolutionUnitOfWork, value: MetadataValue, target: Record) -> None:
        source = self._source_record(uow, value)
        for target_field, source_field in self.mappings.items():
            text = self._source_text(source, value, source_field)
            if text is None:
                continue
            if self.update_enabled:
                target.clear_metadata(target_field)
            elif target.has_metadata_value(target_field, text):
                continue
            target.add_metadata(target_field, text)

    @staticmethod
    def _source_record(uow: ResolutionUnitOfWork, value: MetadataValue) -> Record | None:
        if value.owner_type is not EntityType.RECORD:
            return None
        return uow.repositories.records.get(value.owner_id)

    @staticmethod
    def _source_text(
        source: Record | None,
        value: MetadataValue,
        source_field: MetadataField,
    ) -> str | None:
        if source_field == value.metadata_field:
            return value.value
        if source is None:
            log.debug("No source record for %s; skipping %s", value.metadata_field, source_field)
            return None
        sibling = next(
            (
                candidate
                for candidate in source.metadata_for(source_field)
                if candidate.place == value.place
            ),
            None,
        )
        if sibling is None or sibling.is_placeholder or not sibling.value.strip():
            return None
        return sibling.value
