"""Typed view over the properties that drive authority resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .properties import ConfigurationProperties

SKIP_EMPTY_AUTHORITY: Final[str] = "cris-consumer.skip-empty-authority"
UUID_STRATEGY_PREFIX: Final[str] = "cris.import.submission.strategy.uuid"
SUBMISSION_ENABLED: Final[str] = "cris.import.submission.enabled.entity"


@dataclass(frozen=True, slots=True)
class ResolutionSettings:
    properties: ConfigurationProperties

    @property
    def skip_empty_authority(self) -> bool:
        return self.properties.get_boolean_property(SKIP_EMPTY_AUTHORITY, default=False)

    def is_uuid_strategy_enabled(self, field_key: str) -> bool:
        return self.properties.get_boolean_property(
            f"{UUID_STRATEGY_PREFIX}.{field_key}", default=False
        )

    def is_submission_enabled(self, field_key: str) -> bool:
        """Field-specific switch first, then the global one (enabled by default)."""

        field_property = f"{SUBMISSION_ENABLED}.{field_key}"
        if self.properties.has_property(field_property):
            return self.properties.get_boolean_property(field_property)
        return self.properties.get_boolean_property(SUBMISSION_ENABLED, default=True)
