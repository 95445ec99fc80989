"""Frustum culling of axis-aligned boxes, with GPU-compatible layouts."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Iterable, Sequence

Vec3Tuple = tuple[float, float, float]
Plane = tuple[float, float, float, float]

_AABB_FORMAT = struct.Struct("<3ff3ff")
_FRUSTUM_FORMAT = struct.Struct("<24f")
_CULL_RESULT_FORMAT = struct.Struct("<I")


@dataclass(frozen=True)
class GpuAabb:
    """Axis-aligned bounding box, padded to 32 bytes for the GPU."""

    min: Vec3Tuple = (0.0, 0.0, 0.0)
    max: Vec3Tuple = (0.0, 0.0, 0.0)

    def to_bytes(self) -> bytes:
        return _AABB_FORMAT.pack(*self.min, 0.0, *self.max, 0.0)


def _zero_planes() -> tuple[Plane, ...]:
    return tuple((0.0, 0.0, 0.0, 0.0) for _ in range(6))


@dataclass(frozen=True)
class GpuFrustum:
    """Six clip planes, each (nx, ny, nz, d): left, right, bottom, top, near, far."""

    planes: tuple[Plane, ...] = field(default_factory=_zero_planes)

    def to_bytes(self) -> bytes:
        return _FRUSTUM_FORMAT.pack(*(v for plane in self.planes for v in plane))


@dataclass(frozen=True)
class CullResult:
    """Visibility flag: 1 visible, 0 culled."""

    visible: int = 0

    def to_bytes(self) -> bytes:
        return _CULL_RESULT_FORMAT.pack(self.visible)


def extract_frustum_planes(vp: Sequence[Sequence[float]]) -> GpuFrustum:
    """Extract the six normalised clip planes from a column-major view-projection matrix."""
    r0, r1, r2, r3 = ([vp[col][i] for col in range(4)] for i in range(4))

    planes = []
    for sign, row in ((1.0, r0), (-1.0, r0), (1.0, r1), (-1.0, r1), (1.0, r2), (-1.0, r2)):
        plane = [a + sign * b for a, b in zip(r3, row)]
        length = math.sqrt(plane[0] ** 2 + plane[1] ** 2 + plane[2] ** 2)
        if length > 1e-6:
            plane = [v / length for v in plane]
        planes.append(tuple(plane))
    return GpuFrustum(tuple(planes))


def _aabb_visible(aabb: GpuAabb, planes: Iterable[Plane]) -> bool:
    for nx, ny, nz, d in planes:
        px = aabb.max[0] if nx >= 0.0 else aabb.min[0]
        py = aabb.max[1] if ny >= 0.0 else aabb.min[1]
        pz = aabb.max[2] if nz >= 0.0 else aabb.min[2]
        if nx * px + ny * py + nz * pz + d < 0.0:
            return False
    return True


def cull_cpu(frustum: GpuFrustum, aabbs: Iterable[GpuAabb]) -> list[CullResult]:
    """Cull boxes against the frustum on the CPU, one result per box."""
    return [CullResult(1 if _aabb_visible(aabb, frustum.planes) else 0) for aabb in aabbs]