from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, TypeVar

from .cartographer import ROOM_SIZE, room_coordinates

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RoomPosition:
    x: int
    y: int
    room_name: str

    def __post_init__(self) -> None:
        if not (0 <= self.x < ROOM_SIZE and 0 <= self.y < ROOM_SIZE):
            raise ValueError(f"Position {self.x},{self.y} is outside the room")

    def __str__(self) -> str:
        return f"[{self.room_name} {self.x},{self.y}]"

    @property
    def coords(self) -> str:
        return f"{self.x}:{self.y}"

    @property
    def world_coordinates(self) -> Tuple[int, int]:
        col, row = room_coordinates(self.room_name)
        return col * ROOM_SIZE + self.x, row * ROOM_SIZE + self.y

    def get_range_to(self, other: "RoomPosition") -> int:
        ax, ay = self.world_coordinates
        bx, by = other.world_coordinates
        return max(abs(ax - bx), abs(ay - by))

    def in_range_to(self, other: "RoomPosition", distance: int) -> bool:
        return self.get_range_to(other) <= distance

    def is_equal_to(self, other: "RoomPosition") -> bool:
        return self == other

    def find_in_range(self, objects: Iterable[T], distance: int) -> List[T]:
        """Return the objects (anything with a ``pos``) within ``distance``."""

        return [obj for obj in objects if self.in_range_to(obj.pos, distance)]


def deref_coords(coords: str, room_name: str) -> RoomPosition:
    """Inverse of :attr:`RoomPosition.coords`."""

    x, _, y = coords.partition(":")
    return RoomPosition(int(x), int(y), room_name)


__all__ = ["RoomPosition", "deref_coords"]
