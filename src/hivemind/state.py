"""World state container read and written by the decision loop.

``WorldState`` plays the role of the game API: the clock, the rooms that
are currently visible, static terrain, the markers directives are anchored
to, live creeps and the persisted memory blob.  The simulation engine
advances it one tick at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, MutableMapping, Optional, Set, Tuple

from .world.cartographer import neighbors
from .world.objects import Creep, Marker, Structure
from .world.positions import RoomPosition
from .world.room import Room


@dataclass
class WorldState:
    tick: int = 0
    username: str = "Overseer"
    rooms: Dict[str, Room] = field(default_factory=dict)
    terrain: Dict[str, FrozenSet[Tuple[int, int]]] = field(default_factory=dict)
    markers: Dict[str, Marker] = field(default_factory=dict)
    creeps: Dict[str, Creep] = field(default_factory=dict)
    memory: MutableMapping[str, Any] = field(default_factory=dict)
    closed_exits: Set[FrozenSet[str]] = field(default_factory=set)
    unavailable_rooms: Set[str] = field(default_factory=set)
    energy_income: int = 10

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------
    def advance_tick(self, ticks: int = 1) -> None:
        if ticks < 0:
            raise ValueError("ticks must be non-negative")
        for _ in range(ticks):
            self.tick += 1
            for name in list(self.creeps):
                creep = self.creeps[name]
                creep.ticks_to_live -= 1
                if creep.ticks_to_live <= 0:
                    del self.creeps[name]
            for room in self.rooms.values():
                if room.controller is not None:
                    room.controller.tick()
                if room.my:
                    room.energy_available = min(
                        room.energy_capacity_available, room.energy_available + self.energy_income
                    )
                for nuke in room.nukes:
                    nuke.time_to_land -= 1
                room.nukes = [nuke for nuke in room.nukes if nuke.time_to_land > 0]

    # ------------------------------------------------------------------
    # Map queries
    # ------------------------------------------------------------------
    def describe_exits(self, room_name: str) -> Dict[str, str]:
        return {
            direction: other
            for direction, other in neighbors(room_name).items()
            if frozenset((room_name, other)) not in self.closed_exits
        }

    def is_room_available(self, room_name: str) -> bool:
        return room_name not in self.unavailable_rooms

    def terrain_walls(self, room_name: str) -> FrozenSet[Tuple[int, int]]:
        return self.terrain.get(room_name, frozenset())

    def owned_rooms(self) -> List[Room]:
        return [room for _, room in sorted(self.rooms.items()) if room.my]

    def my_spawns(self) -> List[Structure]:
        return [spawn for room in self.owned_rooms() for spawn in room.spawns]

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------
    def create_marker(
        self,
        pos: RoomPosition,
        kind: str,
        name: str,
        memory: Optional[MutableMapping[str, Any]] = None,
    ) -> Optional[str]:
        """Place a marker; returns its name, or ``None`` if the name is taken."""

        if name in self.markers:
            return None
        self.markers[name] = Marker(name=name, kind=kind, pos=pos, memory=dict(memory or {}))
        return name

    def remove_marker(self, name: str) -> None:
        self.markers.pop(name, None)

    def markers_in_room(self, room_name: str) -> List[Marker]:
        return [marker for marker in self.markers.values() if marker.pos.room_name == room_name]


__all__ = ["WorldState"]
