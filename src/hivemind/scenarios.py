"""World builders for tests and the demo scenario."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Iterable, List, Optional, Sequence, Tuple

from .state import WorldState
from .world.objects import Controller, Hostile, Source, Structure, StructureKind
from .world.positions import RoomPosition
from .world.room import Room

# Extension energy capacity by controller level, spawn included.
ENERGY_CAPACITY_BY_LEVEL = {0: 0, 1: 300, 2: 550, 3: 800, 4: 1300, 5: 1800, 6: 2300, 7: 5600, 8: 12900}


@dataclass(slots=True)
class DemoScenarioConfig:
    seed: int = 7
    home_room: str = "E1S1"
    second_room: str = "E3S1"
    home_level: int = 7
    second_level: int = 7
    remote_rooms: Tuple[str, ...] = ("E2S1", "E1S2")
    invader_room: Optional[str] = "E1S2"
    with_extract: bool = True
    username: str = "Overseer"


def build_owned_room(
    name: str,
    *,
    level: int = 7,
    spawns: int = 1,
    storage: bool = True,
    terminal: bool = False,
    sources: Sequence[Tuple[int, int]] = ((10, 10), (40, 40)),
    energy: Optional[int] = None,
    username: str = "Overseer",
    safe_mode_available: int = 1,
) -> Room:
    capacity = ENERGY_CAPACITY_BY_LEVEL.get(level, 0)
    room = Room(
        name=name,
        controller=Controller(
            pos=RoomPosition(25, 5, name),
            level=level,
            my=True,
            owner=username,
            safe_mode_available=safe_mode_available,
        ),
        sources=[Source(f"{name}-src{i}", RoomPosition(x, y, name)) for i, (x, y) in enumerate(sources)],
        energy_available=capacity if energy is None else energy,
        energy_capacity_available=capacity,
    )
    for i in range(spawns):
        room.structures.append(Structure(f"{name}-spawn{i}", StructureKind.SPAWN, RoomPosition(25 + 2 * i, 25, name)))
    if storage:
        room.structures.append(Structure(f"{name}-storage", StructureKind.STORAGE, RoomPosition(25, 28, name)))
    if terminal:
        room.structures.append(Structure(f"{name}-terminal", StructureKind.TERMINAL, RoomPosition(27, 28, name)))
    return room


def build_remote_room(
    name: str,
    *,
    sources: Sequence[Tuple[int, int]] = ((10, 10),),
    owner: Optional[str] = None,
    reservation: Optional[str] = None,
) -> Room:
    return Room(
        name=name,
        controller=Controller(pos=RoomPosition(25, 5, name), owner=owner, reservation=reservation),
        sources=[Source(f"{name}-src{i}", RoomPosition(x, y, name)) for i, (x, y) in enumerate(sources)],
    )


def place_hostiles(
    room: Room,
    count: int,
    *,
    owner: str = "Invader",
    body: Tuple[str, ...] = ("attack", "move"),
    boosted: bool = False,
    start: Tuple[int, int] = (5, 45),
) -> List[Hostile]:
    hostiles = [
        Hostile(
            id=f"{room.name}-hostile{len(room.hostiles) + i}",
            pos=RoomPosition(start[0] + i, start[1], room.name),
            owner=owner,
            body=body,
            boosts=("XUH2O",) if boosted else (),
        )
        for i in range(count)
    ]
    room.hostiles.extend(hostiles)
    return hostiles


def build_world(rooms: Iterable[Room], *, username: str = "Overseer") -> WorldState:
    world = WorldState(username=username)
    for room in rooms:
        world.rooms[room.name] = room
    return world


def generate_demo_world(config: Optional[DemoScenarioConfig] = None) -> WorldState:
    """Two colonies, a couple of remote rooms and an NPC raid."""

    config = config or DemoScenarioConfig()
    rng = random.Random(config.seed)
    rooms = [
        build_owned_room(config.home_room, level=config.home_level, terminal=True, username=config.username),
        build_owned_room(config.second_room, level=config.second_level, username=config.username),
    ]
    for name in config.remote_rooms:
        count = rng.randint(1, 2)
        sources = [(rng.randint(5, 44), rng.randint(5, 44)) for _ in range(count)]
        rooms.append(build_remote_room(name, sources=sources))
    world = build_world(rooms, username=config.username)
    if config.invader_room is not None and config.invader_room in world.rooms:
        place_hostiles(world.rooms[config.invader_room], 2)
    if config.with_extract:
        home = world.rooms[config.home_room]
        home.structures.append(
            Structure(f"{home.name}-extractor", StructureKind.EXTRACTOR, RoomPosition(12, 38, home.name))
        )
        pos = RoomPosition(12, 38, home.name)
        world.create_marker(pos, "extract", f"extract@{home.name}:{pos.x}:{pos.y}")
    return world


__all__ = [
    "DemoScenarioConfig",
    "ENERGY_CAPACITY_BY_LEVEL",
    "build_owned_room",
    "build_remote_room",
    "build_world",
    "generate_demo_world",
    "place_hostiles",
]
