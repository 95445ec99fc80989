"""Draw lists for indirect rendering, with CPU-side frustum culling.

All objects are uploaded as ``ObjectData`` records. A culling step (on the
GPU, or ``GpuDrawList.cpu_frustum_cull`` as a fallback) sets each object's
indirect command to one instance if visible and zero if culled. The render
pass then issues one indirect draw per command.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Sequence

Vec3Tuple = tuple[float, float, float]
Plane = Sequence[float]
Matrix4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

_DRAW_FORMAT = struct.Struct("<4I")
_DRAW_INDEXED_FORMAT = struct.Struct("<3IiI")
_OBJECT_FORMAT = struct.Struct("<16f3ff3ff4I")


@dataclass
class DrawIndirectCommand:
    """One non-indexed indirect draw; ``instance_count`` is 0 when culled."""

    vertex_count: int = 0
    instance_count: int = 0
    first_vertex: int = 0
    first_instance: int = 0

    SIZE: ClassVar[int] = _DRAW_FORMAT.size

    def to_bytes(self) -> bytes:
        return _DRAW_FORMAT.pack(
            self.vertex_count, self.instance_count, self.first_vertex, self.first_instance
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> DrawIndirectCommand:
        """Decode a command from exactly 16 little-endian bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(*_DRAW_FORMAT.unpack(data))


@dataclass
class DrawIndexedIndirectCommand:
    """One indexed indirect draw."""

    index_count: int = 0
    instance_count: int = 0
    first_index: int = 0
    base_vertex: int = 0
    first_instance: int = 0

    SIZE: ClassVar[int] = _DRAW_INDEXED_FORMAT.size

    def to_bytes(self) -> bytes:
        return _DRAW_INDEXED_FORMAT.pack(
            self.index_count,
            self.instance_count,
            self.first_index,
            self.base_vertex,
            self.first_instance,
        )


def _zero_matrix() -> Matrix4:
    return tuple((0.0, 0.0, 0.0, 0.0) for _ in range(4))  # type: ignore[return-value]


@dataclass
class ObjectData:
    """Per-object data for culling and drawing (112 bytes packed)."""

    model: Matrix4 = field(default_factory=_zero_matrix)
    """Model matrix as four columns."""
    aabb_min: Vec3Tuple = (0.0, 0.0, 0.0)
    aabb_max: Vec3Tuple = (0.0, 0.0, 0.0)
    mesh_id: int = 0
    vertex_count: int = 0
    first_vertex: int = 0

    SIZE: ClassVar[int] = _OBJECT_FORMAT.size

    def to_bytes(self) -> bytes:
        return _OBJECT_FORMAT.pack(
            *(v for column in self.model for v in column),
            *self.aabb_min,
            0.0,
            *self.aabb_max,
            0.0,
            self.mesh_id,
            self.vertex_count,
            self.first_vertex,
            0,
        )


def aabb_in_frustum(aabb_min: Vec3Tuple, aabb_max: Vec3Tuple, planes: Sequence[Plane]) -> bool:
    """Whether a box is at least partly inside the frustum.

    Each plane is (nx, ny, nz, d) with the inside where the signed distance
    is non-negative. The box is outside if its most positive corner lies
    behind any plane.
    """
    for nx, ny, nz, d in planes:
        px = aabb_max[0] if nx >= 0.0 else aabb_min[0]
        py = aabb_max[1] if ny >= 0.0 else aabb_min[1]
        pz = aabb_max[2] if nz >= 0.0 else aabb_min[2]
        if nx * px + ny * py + nz * pz + d < 0.0:
            return False
    return True


@dataclass
class GpuDrawList:
    """Objects and their indirect draw commands for one frame."""

    objects: list[ObjectData] = field(default_factory=list)
    commands: list[DrawIndirectCommand] = field(default_factory=list)
    visible_count: int = 0
    """Visible objects after the last CPU cull."""

    def add_object(self, data: ObjectData) -> int:
        """Add an object, visible until culled, and return its index."""
        index = len(self.objects)
        self.commands.append(
            DrawIndirectCommand(
                vertex_count=data.vertex_count,
                instance_count=1,
                first_vertex=data.first_vertex,
                first_instance=index,
            )
        )
        self.objects.append(data)
        return index

    def clear(self) -> None:
        """Empty the list for a new frame."""
        self.objects.clear()
        self.commands.clear()
        self.visible_count = 0

    def object_count(self) -> int:
        return len(self.objects)

    def commands_as_bytes(self) -> bytes:
        """All commands packed for upload."""
        return b"".join(command.to_bytes() for command in self.commands)

    def objects_as_bytes(self) -> bytes:
        """All object records packed for upload."""
        return b"".join(obj.to_bytes() for obj in self.objects)

    def count_visible(self) -> int:
        """Number of commands with at least one instance."""
        return sum(1 for command in self.commands if command.instance_count > 0)

    def cpu_frustum_cull(self, frustum_planes: Sequence[Plane]) -> None:
        """Cull on the CPU, setting each command's instance count to 1 or 0."""
        self.visible_count = 0
        for obj, command in zip(self.objects, self.commands):
            visible = aabb_in_frustum(obj.aabb_min, obj.aabb_max, frustum_planes)
            command.instance_count = 1 if visible else 0
            if visible:
                self.visible_count += 1