"""Find the container that new related records of a given type belong in."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from entitylink.domain.model import Container, ContainerGroup

log = logging.getLogger(__name__)


class ContainerRouter:
    """Search the groups above a container for one tagged with a relationship type.

    The search starts at the owner's parent groups. Each *level* is scanned in
    declared order, every group depth-first (its own containers before its
    subgroups). Only when a whole level fails does the search climb: the parents
    of the level's first group are tried (including everything above them)
    before the parents of its second group, and so on. The first match in this
    order wins, so a fixed hierarchy always yields the same container.
    """

    def find_container(
        self,
        owner: Container | None,
        relationship_type: str,
    ) -> Container | None:
        if owner is None:
            return None

        searched: set[UUID] = set()
        climbed: set[UUID] = set()
        levels: list[Sequence[ContainerGroup]] = [owner.parent_groups]

        while levels:
            level = levels.pop()
            for group in level:
                found = self._search_group(group, relationship_type, searched)
                if found is not None:
                    return found

            parent_levels: list[Sequence[ContainerGroup]] = []
            for group in level:
                if group.id in climbed:
                    continue
                climbed.add(group.id)
                if group.parent_groups:
                    parent_levels.append(group.parent_groups)
            # stack: push in reverse so the first group's ancestry is explored first
            levels.extend(reversed(parent_levels))

        log.debug(
            "No container tagged %s above container %s (searched %d groups)",
            relationship_type,
            owner.id,
            len(searched),
        )
        return None

    @staticmethod
    def _search_group(
        root: ContainerGroup,
        relationship_type: str,
        searched: set[UUID],
    ) -> Container | None:
        pending: list[ContainerGroup] = [root]
        while pending:
            group = pending.pop()
            if group.id in searched:
                continue
            searched.add(group.id)
            for container in group.containers:
                if container.declares_relationship_type(relationship_type):
                    return container
            pending.extend(reversed(group.subgroups))
        return None
