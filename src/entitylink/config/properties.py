"""String-keyed configuration properties.

Properties use dotted keys (``cris.import.submission.enabled.entity``) and are
read from a ``KEY=VALUE`` file. Array properties are comma separated; ``\\,``
keeps a literal comma inside one element.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from dotenv import dotenv_values

from .env import get_config_path
from .errors import InvalidPropertyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

log = logging.getLogger(__name__)

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})
_UNESCAPED_COMMA: Final[re.Pattern[str]] = re.compile(r"(?<!\\),")


def split_array_value(raw: str) -> list[str]:
    """Split ``raw`` on unescaped commas, trimming and unescaping each element."""

    parts = (part.strip().replace("\\,", ",") for part in _UNESCAPED_COMMA.split(raw))
    return [part for part in parts if part]


def parse_boolean(key: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise InvalidPropertyError(f"Property {key} is not a boolean: {raw!r}")


@dataclass(slots=True)
class ConfigurationProperties:
    """Mutable property store; each key keeps its raw values in insertion order."""

    _values: dict[str, list[str]] = field(default_factory=dict[str, list[str]], repr=False)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str | Iterable[str]]) -> ConfigurationProperties:
        properties = cls()
        for key, value in values.items():
            if isinstance(value, str):
                properties.set_property(key, value)
                continue
            for item in value:
                properties.add_property_value(key, item)
        return properties

    @classmethod
    def from_file(cls, path: Path) -> ConfigurationProperties:
        properties = cls()
        for key, value in dotenv_values(path).items():
            if value is None:
                log.warning("Ignoring property %s without a value in %s", key, path)
                continue
            properties.set_property(key, value)
        log.debug("Loaded %d properties from %s", len(properties.keys()), path)
        return properties

    @classmethod
    def from_environment(cls) -> ConfigurationProperties:
        """Load the file named by ``ENTITYLINK_CONFIG``, or start empty."""

        path = get_config_path()
        return cls() if path is None else cls.from_file(path)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._values)

    def has_property(self, key: str) -> bool:
        return key in self._values

    def set_property(self, key: str, value: str) -> None:
        self._values[key] = [value]

    def add_property_value(self, key: str, value: str) -> None:
        self._values.setdefault(key, []).append(value)

    def remove_property(self, key: str) -> None:
        self._values.pop(key, None)

    def get_property(self, key: str, default: str | None = None) -> str | None:
        values = self._values.get(key)
        if not values:
            return default
        return ",".join(values)

    def get_boolean_property(self, key: str, default: bool = False) -> bool:  # noqa: FBT001, FBT002
        raw = self.get_property(key)
        if raw is None or not raw.strip():
            return default
        return parse_boolean(key, raw)

    def get_array_property(self, key: str) -> list[str]:
        result: list[str] = []
        for raw in self._values.get(key, ()):
            result.extend(split_array_value(raw))
        return result
