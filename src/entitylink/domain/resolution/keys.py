"""External key derivation for authority-controlled metadata values.

Precedence (first match wins):

1. ``will be generated::<key>`` authority -> ``<key>``
2. ``will be referenced::<key>`` authority -> ``<key>``
3. random-key strategy enabled for the field -> fresh UUID4
4. otherwise the MD5 hex digest of the upper-cased value text
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Final
from uuid import uuid4

if TYPE_CHECKING:
    from entitylink.config import ResolutionSettings
    from entitylink.domain.model import MetadataValue

GENERATE: Final[str] = "will be generated::"
REFERENCE: Final[str] = "will be referenced::"


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_generate_authority(authority: str | None) -> bool:
    return authority is not None and authority.startswith(GENERATE)


def is_reference_authority(authority: str | None) -> bool:
    return authority is not None and authority.startswith(REFERENCE)


def is_authority_settled(authority: str | None) -> bool:
    """A non-blank authority that is not a pending generate/reference token."""

    return (
        not is_blank(authority)
        and not is_generate_authority(authority)
        and not is_reference_authority(authority)
    )


def generate_authority(key: str) -> str:
    return f"{GENERATE}{key}"


def reference_authority(key: str) -> str:
    return f"{REFERENCE}{key}"


def fingerprint(text: str) -> str:
    return hashlib.md5(text.upper().encode("utf-8"), usedforsecurity=False).hexdigest()


def derive_key(value: MetadataValue, settings: ResolutionSettings) -> str:
    authority = value.authority
    if authority is not None and is_generate_authority(authority):
        return authority.removeprefix(GENERATE)
    if authority is not None and is_reference_authority(authority):
        return authority.removeprefix(REFERENCE)
    if settings.is_uuid_strategy_enabled(value.field_key):
        # no authority was supplied, so every pass creates a new record
        return str(uuid4())
    return fingerprint(value.value)
