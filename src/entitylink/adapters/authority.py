"""Authority control backed by configuration properties.

A field is authority controlled when ``choices.plugin.<schema.element[.qualifier]>``
names an authority plugin; the plugin's linked relationship type is read from
``cris.ItemAuthority.<plugin>.entityType``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from entitylink.domain.model import MetadataField

if TYPE_CHECKING:
    from entitylink.config import ConfigurationProperties

CHOICES_PLUGIN_PREFIX: Final[str] = "choices.plugin"
ITEM_AUTHORITY_PREFIX: Final[str] = "cris.ItemAuthority"


class ConfiguredAuthorityControl:
    def __init__(self, properties: ConfigurationProperties) -> None:
        self.properties = properties

    def plugin_name(self, field_key: str) -> str | None:
        try:
            dotted = MetadataField.parse(field_key, separator="_").to_string()
        except ValueError:
            # underscores inside a field part make the key ambiguous
            return None
        plugin = self.properties.get_property(f"{CHOICES_PLUGIN_PREFIX}.{dotted}")
        if plugin is None or not plugin.strip():
            return None
        return plugin.strip()

    def is_choices_configured(self, field_key: str) -> bool:
        return self.plugin_name(field_key) is not None

    def get_relationship_type(self, field_key: str) -> str | None:
        plugin = self.plugin_name(field_key)
        if plugin is None:
            return None
        relationship_type = self.properties.get_property(
            f"{ITEM_AUTHORITY_PREFIX}.{plugin}.entityType"
        )
        if relationship_type is None or not relationship_type.strip():
            return None
        return relationship_type.strip()


if TYPE_CHECKING:
    from entitylink.config import ConfigurationProperties as _Properties
    from entitylink.domain.ports import AuthorityControl

    _authority_check: AuthorityControl = ConfiguredAuthorityControl(_Properties())
