"""Container hierarchy.

Leaf containers hold records; container groups hold containers and other groups.
A group may have several parents, so the hierarchy above a container can fan out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from entitylink.domain.model.enums import EntityType
from entitylink.domain.model.fields import RELATIONSHIP_TYPE
from entitylink.domain.model.metadata import MetadataBearingMixin


@dataclass(eq=False, kw_only=True)
class Container(MetadataBearingMixin):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.CONTAINER

    name: str

    _parent_groups: list[ContainerGroup] = field(
        default_factory=list["ContainerGroup"], repr=False, init=False
    )

    @property
    def parent_groups(self) -> tuple[ContainerGroup, ...]:
        return tuple(self._parent_groups)

    @property
    def relationship_type(self) -> str | None:
        return self.first_value(RELATIONSHIP_TYPE)

    def declares_relationship_type(self, relationship_type: str) -> bool:
        return self.has_metadata_value(RELATIONSHIP_TYPE, relationship_type)


@dataclass(eq=False, kw_only=True)
class ContainerGroup(MetadataBearingMixin):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.CONTAINER_GROUP

    name: str

    _containers: list[Container] = field(
        default_factory=list["Container"], repr=False, init=False
    )
    _subgroups: list[ContainerGroup] = field(
        default_factory=list["ContainerGroup"], repr=False, init=False
    )
    _parent_groups: list[ContainerGroup] = field(
        default_factory=list["ContainerGroup"], repr=False, init=False
    )

    @property
    def containers(self) -> tuple[Container, ...]:
        return tuple(self._containers)

    @property
    def subgroups(self) -> tuple[ContainerGroup, ...]:
        return tuple(self._subgroups)

    @property
    def parent_groups(self) -> tuple[ContainerGroup, ...]:
        return tuple(self._parent_groups)

    def add_container(self, container: Container) -> Container:
        if container not in self._containers:
            self._containers.append(container)
        if self not in container._parent_groups:  # noqa: SLF001
            container._parent_groups.append(self)  # noqa: SLF001
        return container

    def add_subgroup(self, group: ContainerGroup) -> ContainerGroup:
        if group is self:
            raise ValueError("A container group cannot contain itself")
        if group not in self._subgroups:
            self._subgroups.append(group)
        if self not in group._parent_groups:  # noqa: SLF001
            group._parent_groups.append(self)  # noqa: SLF001
        return group

    def create_container(self, name: str, *, relationship_type: str | None = None) -> Container:
        container = Container(name=name)
        if relationship_type is not None:
            container.add_metadata(RELATIONSHIP_TYPE, relationship_type)
        return self.add_container(container)

    def create_subgroup(self, name: str) -> ContainerGroup:
        return self.add_subgroup(ContainerGroup(name=name))
