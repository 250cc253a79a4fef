"""Room intel persisted in memory.

Visible rooms are recorded every tick so that decisions about rooms that
are out of sight (outpost candidates, route costs) can still be made from
the last observation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .memory import room_memory
from .world.positions import RoomPosition, deref_coords
from .world.room import Room


@dataclass(slots=True)
class SafetyData:
    safe_for: int = 0
    unsafe_for: int = 0
    tick: int = -1


def record_room(world: Any, room: Room) -> None:
    mem = room_memory(world.memory, room.name)
    controller = room.controller
    owner = controller.owner if controller is not None else None
    reservation = controller.reservation if controller is not None else None
    mem["own"] = owner if owner and owner != world.username else None
    mem["res"] = reservation if reservation and reservation != world.username else None
    mem["src"] = [{"c": source.pos.coords} for source in room.sources]
    mem["tick"] = world.tick


def update_safety_data(world: Any, room: Room) -> SafetyData:
    """Advance the safe/unsafe streak counters once per tick."""

    mem = room_memory(world.memory, room.name)
    raw = mem.get("safety") or {}
    data = SafetyData(
        safe_for=int(raw.get("safe_for", 0)),
        unsafe_for=int(raw.get("unsafe_for", 0)),
        tick=int(raw.get("tick", -1)),
    )
    if data.tick == world.tick:
        return data
    if room.dangerous_hostiles:
        data.unsafe_for += 1
        data.safe_for = 0
    else:
        data.safe_for += 1
        data.unsafe_for = 0
    data.tick = world.tick
    mem["safety"] = {"safe_for": data.safe_for, "unsafe_for": data.unsafe_for, "tick": data.tick}
    return data


def refresh_intel(world: Any) -> None:
    for room in world.rooms.values():
        record_room(world, room)
        update_safety_data(world, room)


def get_safety_data(world: Any, room_name: str) -> SafetyData:
    raw = room_memory(world.memory, room_name).get("safety") or {}
    return SafetyData(
        safe_for=int(raw.get("safe_for", 0)),
        unsafe_for=int(raw.get("unsafe_for", 0)),
        tick=int(raw.get("tick", -1)),
    )


def room_owned_by(world: Any, room_name: str) -> Optional[str]:
    rooms = world.memory.get("rooms") or {}
    return (rooms.get(room_name) or {}).get("own")


def room_reserved_by(world: Any, room_name: str) -> Optional[str]:
    rooms = world.memory.get("rooms") or {}
    return (rooms.get(room_name) or {}).get("res")


def get_sources(world: Any, room_name: str) -> Optional[List[RoomPosition]]:
    """Known source positions, or ``None`` if the room was never observed."""

    rooms = world.memory.get("rooms") or {}
    saved = (rooms.get(room_name) or {}).get("src")
    if saved is None:
        return None
    return [deref_coords(entry["c"], room_name) for entry in saved]


__all__ = [
    "SafetyData",
    "get_safety_data",
    "get_sources",
    "record_room",
    "refresh_intel",
    "room_owned_by",
    "room_reserved_by",
    "update_safety_data",
]
