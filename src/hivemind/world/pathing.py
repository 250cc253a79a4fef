"""Route and path estimates used by the decision loop.

Routes are computed over the room graph with a deterministic Dijkstra
search (ties broken lexicographically).  Inside a single room paths are
exact breadth-first searches over the terrain grid with eight-way movement.
Paths that cross rooms are estimated from world coordinates plus a detour
penalty for every room the route adds over the straight line; they are
good enough for ranking candidates, which is all the callers need.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import heapq
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from .. import intel
from .cartographer import ROOM_SIZE, RoomType, linear_distance, room_type
from .positions import RoomPosition

MAX_ROUTE_ROOMS: int = 16
ROOM_TARGET_RANGE: int = 20

_ROOM_COSTS: Dict[RoomType, float] = {
    RoomType.HIGHWAY: 1.0,
    RoomType.CROSSROAD: 1.0,
    RoomType.CONTROLLER: 1.5,
    RoomType.SOURCE_KEEPER: 3.0,
    RoomType.CORE: 3.0,
}


@dataclass(frozen=True, slots=True)
class PathResult:
    length: int
    incomplete: bool
    rooms: Tuple[str, ...] = ()


def _room_cost(world: Any, room_name: str) -> Optional[float]:
    if not world.is_room_available(room_name):
        return None
    if intel.room_owned_by(world, room_name):
        return None
    return _ROOM_COSTS[room_type(room_name)]


def find_route(world: Any, from_room: str, to_room: str) -> Optional[Dict[str, bool]]:
    """Rooms to traverse from ``from_room`` to ``to_room`` (origin excluded).

    Returns ``None`` when no route exists; an empty mapping means the two
    rooms are the same.
    """

    if from_room == to_room:
        return {}
    frontier: list[tuple[float, str]] = [(0.0, from_room)]
    costs: Dict[str, float] = {from_room: 0.0}
    parents: Dict[str, str] = {}
    visited: Set[str] = set()
    while frontier:
        cost, room = heapq.heappop(frontier)
        if room in visited:
            continue
        visited.add(room)
        if room == to_room:
            break
        for nbr in sorted(world.describe_exits(room).values()):
            if nbr in visited or linear_distance(from_room, nbr) > MAX_ROUTE_ROOMS:
                continue
            step = _room_cost(world, nbr) if nbr != to_room else 1.0
            if step is None:
                continue
            next_cost = cost + step
            prev = costs.get(nbr)
            if prev is None or next_cost < prev:
                costs[nbr] = next_cost
                parents[nbr] = room
                heapq.heappush(frontier, (next_cost, nbr))
    if to_room not in visited:
        return None
    rooms = []
    node = to_room
    while node != from_room:
        rooms.append(node)
        node = parents[node]
    return {name: True for name in reversed(rooms)}


def _detour(route: Dict[str, bool], from_room: str, to_room: str) -> int:
    return ROOM_SIZE * max(0, len(route) - linear_distance(from_room, to_room))


def find_path_to_room(
    world: Any,
    start: RoomPosition,
    room_name: str,
    *,
    route: Optional[Dict[str, bool]] = None,
) -> PathResult:
    if start.room_name == room_name:
        return PathResult(length=0, incomplete=False, rooms=(room_name,))
    if route is None:
        route = find_route(world, start.room_name, room_name)
    if route is None:
        return PathResult(length=0, incomplete=True)
    centre = RoomPosition(ROOM_SIZE // 2, ROOM_SIZE // 2, room_name)
    direct = max(1, start.get_range_to(centre) - ROOM_TARGET_RANGE)
    return PathResult(
        length=direct + _detour(route, start.room_name, room_name),
        incomplete=False,
        rooms=tuple(route),
    )


def _neighbours(x: int, y: int) -> Iterable[Tuple[int, int]]:
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < ROOM_SIZE and 0 <= ny < ROOM_SIZE:
                yield nx, ny


def _grid_path_length(
    blocked: Set[Tuple[int, int]],
    start: RoomPosition,
    goal: RoomPosition,
    goal_range: int,
) -> Optional[int]:
    def arrived(x: int, y: int) -> bool:
        return max(abs(x - goal.x), abs(y - goal.y)) <= goal_range

    if arrived(start.x, start.y):
        return 0
    seen = {(start.x, start.y)}
    queue = deque([(start.x, start.y, 0)])
    while queue:
        x, y, steps = queue.popleft()
        for nx, ny in _neighbours(x, y):
            if (nx, ny) in seen or (nx, ny) in blocked:
                continue
            if arrived(nx, ny):
                return steps + 1
            seen.add((nx, ny))
            queue.append((nx, ny, steps + 1))
    return None


def distance(world: Any, origin: RoomPosition, target: RoomPosition, *, goal_range: int = 1) -> Optional[int]:
    """Path length from ``origin`` to within ``goal_range`` of ``target``."""

    if origin.room_name == target.room_name:
        blocked = set(world.terrain_walls(origin.room_name))
        return _grid_path_length(blocked, origin, target, goal_range)
    route = find_route(world, origin.room_name, target.room_name)
    if route is None:
        return None
    return origin.get_range_to(target) + _detour(route, origin.room_name, target.room_name)


def is_reachable(
    world: Any,
    start: RoomPosition,
    end: RoomPosition,
    obstacles: Iterable[RoomPosition] = (),
) -> bool:
    """Whether ``start`` can get next to ``end`` treating ``obstacles`` as walls."""

    if start.room_name != end.room_name:
        return find_route(world, start.room_name, end.room_name) is not None
    blocked = set(world.terrain_walls(start.room_name))
    blocked.update((pos.x, pos.y) for pos in obstacles if pos.room_name == start.room_name)
    return _grid_path_length(blocked, start, end, 1) is not None


def find_pathable_position(world: Any, room_name: str) -> RoomPosition:
    """Open tile closest to the centre of ``room_name``."""

    walls = world.terrain_walls(room_name)
    room = world.rooms.get(room_name)
    occupied = {(s.pos.x, s.pos.y) for s in room.structures} if room is not None else set()
    centre = ROOM_SIZE // 2
    for radius in range(centre):
        for x in range(centre - radius, centre + radius + 1):
            for y in range(centre - radius, centre + radius + 1):
                if max(abs(x - centre), abs(y - centre)) != radius:
                    continue
                if (x, y) in walls or (x, y) in occupied:
                    continue
                return RoomPosition(x, y, room_name)
    return RoomPosition(centre, centre, room_name)


__all__ = [
    "PathResult",
    "distance",
    "find_path_to_room",
    "find_pathable_position",
    "find_route",
    "is_reachable",
]
