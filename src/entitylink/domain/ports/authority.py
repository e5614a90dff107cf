"""Port describing which metadata fields are authority controlled."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AuthorityControl(Protocol):
    def is_choices_configured(self, field_key: str) -> bool:
        """Return whether ``field_key`` (e.g. ``dc_contributor_author``) has an authority."""
        ...

    def get_relationship_type(self, field_key: str) -> str | None:
        """Return the relationship type linked records of this field belong to."""
        ...
