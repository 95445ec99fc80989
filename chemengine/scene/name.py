"""Human-readable entity names."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Name:
    """Name of an entity, for debugging, editors and logs."""

    value: str

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value