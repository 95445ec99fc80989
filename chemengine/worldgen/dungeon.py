"""Dungeon generation by binary space partitioning.

The area is split recursively, a room is placed in each large enough
partition, and consecutive rooms are joined by L-shaped corridors so that
every room is reachable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

_U64 = (1 << 64) - 1
_LCG_MULTIPLIER = 6_364_136_223_846_793_005
_MAX_SPLITS = 6
_ROOM_MARGIN = 2


class _Lcg:
    """Small 64-bit linear congruential generator."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _U64

    def next(self) -> int:
        self._state = (self._state * _LCG_MULTIPLIER + 1) & _U64
        return self._state >> 33


def _half(value: int) -> int:
    """Integer division by two, truncating toward zero."""
    return int(value / 2)


@dataclass(frozen=True)
class Room:
    """An axis-aligned rectangular room."""

    x: int
    y: int
    width: int
    height: int

    def center(self) -> tuple[int, int]:
        return (self.x + _half(self.width), self.y + _half(self.height))

    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: Room) -> bool:
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


@dataclass(frozen=True)
class Corridor:
    """A corridor between two room centres."""

    start: tuple[int, int]
    end: tuple[int, int]


class Tile(Enum):
    """Tile type of the dungeon grid."""

    WALL = "wall"
    FLOOR = "floor"
    CORRIDOR = "corridor"
    DOOR = "door"


def _split_partitions(
    width: int, height: int, min_room_size: int, rng: _Lcg
) -> list[tuple[int, int, int, int]]:
    limit = min_room_size * 2 + 4
    partitions = [(0, 0, width, height)]
    for _ in range(_MAX_SPLITS):
        next_partitions = []
        for px, py, pw, ph in partitions:
            if pw < limit and ph < limit:
                next_partitions.append((px, py, pw, ph))
                continue

            if pw > ph:
                split_h = True
            elif ph > pw:
                split_h = False
            else:
                split_h = rng.next() % 2 == 0

            if split_h and pw >= limit:
                split = min_room_size + 2 + rng.next() % (pw - min_room_size * 2 - 3)
                next_partitions.append((px, py, split, ph))
                next_partitions.append((px + split, py, pw - split, ph))
            elif not split_h and ph >= limit:
                split = min_room_size + 2 + rng.next() % (ph - min_room_size * 2 - 3)
                next_partitions.append((px, py, pw, split))
                next_partitions.append((px, py + split, pw, ph - split))
            else:
                next_partitions.append((px, py, pw, ph))
        partitions = next_partitions
    return partitions


def _place_rooms(
    partitions: list[tuple[int, int, int, int]], min_room_size: int, rng: _Lcg
) -> list[Room]:
    margin = _ROOM_MARGIN
    rooms = []
    for px, py, pw, ph in partitions:
        if pw <= min_room_size + margin * 2 or ph <= min_room_size + margin * 2:
            continue
        rw = min_room_size + rng.next() % (pw - min_room_size - margin * 2 + 1)
        rh = min_room_size + rng.next() % (ph - min_room_size - margin * 2 + 1)
        rx = px + margin + rng.next() % (pw - rw - margin * 2 + 1)
        ry = py + margin + rng.next() % (ph - rh - margin * 2 + 1)
        rooms.append(Room(rx, ry, rw, rh))
    return rooms


@dataclass
class Dungeon:
    """A generated dungeon: rooms, corridors and a row-major tile grid."""

    width: int
    height: int
    rooms: list[Room] = field(default_factory=list)
    corridors: list[Corridor] = field(default_factory=list)
    tiles: list[Tile] = field(default_factory=list)

    @classmethod
    def generate(cls, width: int, height: int, seed: int, min_room_size: int) -> Dungeon:
        """Generate a dungeon; the same arguments always give the same dungeon."""
        if width < 0 or height < 0:
            raise ValueError("dungeon dimensions must not be negative")
        rng = _Lcg(seed)
        partitions = _split_partitions(width, height, min_room_size, rng)
        rooms = _place_rooms(partitions, min_room_size, rng)
        corridors = [
            Corridor(prev.center(), room.center()) for prev, room in zip(rooms, rooms[1:])
        ]

        tiles = [Tile.WALL] * (width * height)

        for room in rooms:
            for ry in range(room.y, min(room.y + room.height, height)):
                for rx in range(room.x, min(room.x + room.width, width)):
                    if rx >= 0 and ry >= 0:
                        tiles[ry * width + rx] = Tile.FLOOR

        def carve(x: int, y: int) -> None:
            if 0 <= x < width and 0 <= y < height:
                idx = y * width + x
                if tiles[idx] is Tile.WALL:
                    tiles[idx] = Tile.CORRIDOR

        for corridor in corridors:
            x1, y1 = corridor.start
            x2, y2 = corridor.end
            for x in range(min(x1, x2), max(x1, x2) + 1):
                carve(x, y1)
            for y in range(min(y1, y2), max(y1, y2) + 1):
                carve(x2, y)

        return cls(width, height, rooms, corridors, tiles)

    def get_tile(self, x: int, y: int) -> Tile:
        """Tile at (x, y); everything outside the grid is wall."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return Tile.WALL
        return self.tiles[y * self.width + x]

    def floor_count(self) -> int:
        """Number of walkable tiles (room floor and corridor)."""
        return sum(1 for tile in self.tiles if tile in (Tile.FLOOR, Tile.CORRIDOR))