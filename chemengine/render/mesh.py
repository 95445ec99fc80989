"""Vertices and meshes in the packed layout used for vertex buffers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Optional

_VERTEX_FORMAT = struct.Struct("<3f4f")


@dataclass(frozen=True)
class Vertex:
    """A vertex: position (3 x f32) followed by RGBA colour (4 x f32)."""

    position: tuple[float, float, float]
    color: tuple[float, float, float, float]

    SIZE: ClassVar[int] = _VERTEX_FORMAT.size
    POSITION_OFFSET: ClassVar[int] = 0
    COLOR_OFFSET: ClassVar[int] = 12

    def to_bytes(self) -> bytes:
        """Little-endian packed bytes for upload to a vertex buffer."""
        return _VERTEX_FORMAT.pack(*self.position, *self.color)


@dataclass
class Mesh:
    """Vertices with optional indices."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: Optional[list[int]] = None

    @classmethod
    def triangle(cls) -> Mesh:
        """A single RGB triangle centred on the origin."""
        return cls(
            vertices=[
                Vertex((0.0, 0.5, 0.0), (1.0, 0.0, 0.0, 1.0)),
                Vertex((-0.5, -0.5, 0.0), (0.0, 1.0, 0.0, 1.0)),
                Vertex((0.5, -0.5, 0.0), (0.0, 0.0, 1.0, 1.0)),
            ],
            indices=None,
        )

    def vertex_bytes(self) -> bytes:
        """All vertices packed back to back."""
        return b"".join(vertex.to_bytes() for vertex in self.vertices)