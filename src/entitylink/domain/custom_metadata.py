"""Derive metadata from templates over a record's own metadata.

Configured per consumer name as parallel arrays::

    event.consumer.<name>.metadata = local.nameHeader, dc.title
    event.consumer.<name>.format = {person.givenName}\\, {person.familyName}, {dc.title}
    event.consumer.<name>.entity-type = Person

Placeholders name fields of the same record; missing ones render as empty.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from entitylink.config.errors import ConfigurationError
from entitylink.domain.model import ENTITY_TYPE, MetadataField

if TYPE_CHECKING:
    from uuid import UUID

    from entitylink.config import ConfigurationProperties
    from entitylink.domain.model import Record
    from entitylink.domain.ports import ResolutionUnitOfWork

log = logging.getLogger(__name__)

METADATA_PLACEHOLDER: Final[re.Pattern[str]] = re.compile(r"\{([^{}]+)\}")
DEFAULT_ENTITY_TYPE: Final[str] = "Person"


def placeholder_names(template: str) -> list[str]:
    return METADATA_PLACEHOLDER.findall(template)


def render_template(record: Record, template: str) -> str:
    rendered = template
    for name in placeholder_names(template):
        replacement = record.first_value(MetadataField.parse(name)) or ""
        rendered = rendered.replace("{" + name + "}", replacement)
    return rendered.strip()


class TemplatedMetadataConsumer:
    def __init__(self, name: str, properties: ConfigurationProperties) -> None:
        self._name = name
        prefix = f"event.consumer.{name}"
        self.entity_type = (
            properties.get_property(f"{prefix}.entity-type") or DEFAULT_ENTITY_TYPE
        )
        self.rules = self._load_rules(
            properties.get_array_property(f"{prefix}.metadata"),
            properties.get_array_property(f"{prefix}.format"),
        )
        self._processed: set[UUID] = set()

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return bool(self.rules)

    def _load_rules(
        self,
        fields: list[str],
        templates: list[str],
    ) -> tuple[tuple[MetadataField, str], ...]:
        if len(fields) != len(templates):
            log.error(
                "Consumer %s disabled: %d target fields but %d formats",
                self._name,
                len(fields),
                len(templates),
            )
            return ()
        try:
            return tuple(
                (MetadataField.parse(name), template)
                for name, template in zip(fields, templates, strict=True)
            )
        except ValueError as exc:
            raise ConfigurationError(f"Consumer {self._name}: {exc}") from exc

    def consume(self, uow: ResolutionUnitOfWork, record: Record | None) -> None:
        if (
            record is None
            or not self.enabled
            or not record.archived
            or record.id in self._processed
            or not self._has_entity_type(record)
        ):
            return

        self._processed.add(record.id)

        with uow.authorization.elevated():
            try:
                self._apply(record)
            except ValueError:
                log.exception("Could not derive metadata for record %s", record.id)

    def end(self, uow: ResolutionUnitOfWork) -> None:
        _ = uow
        self._processed.clear()

    def finish(self, uow: ResolutionUnitOfWork) -> None:
        _ = uow

    def _has_entity_type(self, record: Record) -> bool:
        entity_type = record.first_value(ENTITY_TYPE)
        return entity_type is not None and entity_type.lower() == self.entity_type.lower()

    def _apply(self, record: Record) -> None:
        for target_field, template in self.rules:
            value = render_template(record, template)
            if not value:
                continue
            record.clear_metadata(target_field)
            record.add_metadata(target_field, value)
