"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

CONFIG_PATH_ENV: Final[str] = "ENTITYLINK_CONFIG"


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def get_config_path() -> Path | None:
    """Return the properties file named by ``ENTITYLINK_CONFIG``, if set.

    A path that is set but does not exist is a configuration error rather than
    a silent fallback to defaults.
    """

    raw = os.getenv(CONFIG_PATH_ENV)
    if raw is None or not raw.strip():
        return None
    path = Path(raw).expanduser()
    if not path.is_file():
        raise ConfigurationError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
    return path
