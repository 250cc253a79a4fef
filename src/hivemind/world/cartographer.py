"""Room naming and room-type helpers.

Rooms are laid out on an infinite grid and named ``<W|E><n><N|S><m>``.
``E0`` is column 0 and ``W0`` is column -1; ``S0`` is row 0 and ``N0`` is
row -1.  Every tenth row and column is a highway, the 3x3 block around the
centre of each sector holds source keepers, and everything else is a
controllable room.
"""

from __future__ import annotations

from enum import Enum
import re
from typing import Dict, List, Tuple

ROOM_SIZE: int = 50

_ROOM_NAME = re.compile(r"^([WE])(\d+)([NS])(\d+)$")


class RoomType(str, Enum):
    CONTROLLER = "CONTROLLER"
    SOURCE_KEEPER = "SOURCE_KEEPER"
    CORE = "CORE"
    HIGHWAY = "HIGHWAY"
    CROSSROAD = "CROSSROAD"


def _parse(room_name: str) -> Tuple[str, int, str, int]:
    match = _ROOM_NAME.match(room_name)
    if match is None:
        raise ValueError(f"Invalid room name: {room_name!r}")
    horizontal, x, vertical, y = match.groups()
    return horizontal, int(x), vertical, int(y)


def room_coordinates(room_name: str) -> Tuple[int, int]:
    """Return the grid column and row of ``room_name``."""

    horizontal, x, vertical, y = _parse(room_name)
    col = x if horizontal == "E" else -x - 1
    row = y if vertical == "S" else -y - 1
    return col, row


def room_name_from_coordinates(col: int, row: int) -> str:
    horizontal = f"E{col}" if col >= 0 else f"W{-col - 1}"
    vertical = f"S{row}" if row >= 0 else f"N{-row - 1}"
    return horizontal + vertical


def room_type(room_name: str) -> RoomType:
    _, x, _, y = _parse(room_name)
    fx, fy = x % 10, y % 10
    if fx == 0 and fy == 0:
        return RoomType.CROSSROAD
    if fx == 0 or fy == 0:
        return RoomType.HIGHWAY
    if fx == 5 and fy == 5:
        return RoomType.CORE
    if 4 <= fx <= 6 and 4 <= fy <= 6:
        return RoomType.SOURCE_KEEPER
    return RoomType.CONTROLLER


def linear_distance(room_a: str, room_b: str) -> int:
    """Chebyshev distance between two rooms, in rooms."""

    ax, ay = room_coordinates(room_a)
    bx, by = room_coordinates(room_b)
    return max(abs(ax - bx), abs(ay - by))


def neighbors(room_name: str) -> Dict[str, str]:
    """Return the four rooms sharing an edge with ``room_name``."""

    col, row = room_coordinates(room_name)
    return {
        "top": room_name_from_coordinates(col, row - 1),
        "right": room_name_from_coordinates(col + 1, row),
        "bottom": room_name_from_coordinates(col, row + 1),
        "left": room_name_from_coordinates(col - 1, row),
    }


def find_rooms_in_range(room_name: str, depth: int) -> List[str]:
    """Rooms within ``depth`` rooms of ``room_name``, nearest first.

    The origin itself is excluded.  Ties are broken by name so that the
    result is stable across calls.
    """

    if depth < 0:
        raise ValueError("depth must be non-negative")
    col, row = room_coordinates(room_name)
    found: List[Tuple[int, str]] = []
    for dx in range(-depth, depth + 1):
        for dy in range(-depth, depth + 1):
            if dx == 0 and dy == 0:
                continue
            name = room_name_from_coordinates(col + dx, row + dy)
            found.append((max(abs(dx), abs(dy)), name))
    found.sort()
    return [name for _, name in found]


__all__ = [
    "ROOM_SIZE",
    "RoomType",
    "find_rooms_in_range",
    "linear_distance",
    "neighbors",
    "room_coordinates",
    "room_name_from_coordinates",
    "room_type",
]
