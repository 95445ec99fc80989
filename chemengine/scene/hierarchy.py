"""Parent/child relations between entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Entity:
    """Generational entity handle."""

    index: int
    generation: int = 0


@dataclass(frozen=True)
class Parent:
    """Marks an entity as having a parent."""

    entity: Entity


@dataclass
class Children:
    """Ordered, duplicate-free list of child entities."""

    entities: list[Entity] = field(default_factory=list)

    def add(self, child: Entity) -> None:
        if child not in self.entities:
            self.entities.append(child)

    def remove(self, child: Entity) -> None:
        self.entities = [e for e in self.entities if e != child]

    def contains(self, child: Entity) -> bool:
        return child in self.entities

    def is_empty(self) -> bool:
        return not self.entities

    def __contains__(self, child: object) -> bool:
        return child in self.entities

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)