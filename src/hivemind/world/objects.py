"""Plain records for the room objects the decision loop reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .positions import RoomPosition

RESOURCE_ENERGY = "energy"

NPC_USERNAMES: Tuple[str, ...] = ("Invader", "Source Keeper")

SAFE_MODE_DURATION: int = 20_000
SAFE_MODE_COOLDOWN: int = 50_000

# Body parts that make a hostile a threat to structures or creeps.
HARMFUL_PARTS = frozenset({"attack", "ranged_attack", "heal", "work", "claim"})


class ReturnCode(Enum):
    OK = 0
    ERR_NOT_OWNER = -1
    ERR_BUSY = -4
    ERR_NOT_ENOUGH_RESOURCES = -6
    ERR_TIRED = -11


class StructureKind(str, Enum):
    SPAWN = "spawn"
    EXTENSION = "extension"
    STORAGE = "storage"
    TERMINAL = "terminal"
    RAMPART = "rampart"
    WALL = "constructedWall"
    CONTAINER = "container"
    TOWER = "tower"
    EXTRACTOR = "extractor"


BARRIER_KINDS = frozenset({StructureKind.RAMPART, StructureKind.WALL})


@dataclass(slots=True)
class Structure:
    id: str
    kind: StructureKind
    pos: RoomPosition
    hits: int = 1000
    hits_max: int = 1000
    my: bool = True
    store: Dict[str, int] = field(default_factory=dict)

    @property
    def damaged(self) -> bool:
        return self.hits < self.hits_max


@dataclass(slots=True)
class Controller:
    pos: RoomPosition
    level: int = 0
    my: bool = False
    owner: Optional[str] = None
    reservation: Optional[str] = None
    safe_mode: int = 0
    safe_mode_available: int = 1
    safe_mode_cooldown: int = 0

    def activate_safe_mode(self) -> ReturnCode:
        if not self.my:
            return ReturnCode.ERR_NOT_OWNER
        if self.safe_mode > 0:
            return ReturnCode.ERR_BUSY
        if self.safe_mode_available <= 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        if self.safe_mode_cooldown > 0:
            return ReturnCode.ERR_TIRED
        self.safe_mode = SAFE_MODE_DURATION
        self.safe_mode_available -= 1
        self.safe_mode_cooldown = SAFE_MODE_COOLDOWN
        return ReturnCode.OK

    def tick(self) -> None:
        self.safe_mode = max(0, self.safe_mode - 1)
        self.safe_mode_cooldown = max(0, self.safe_mode_cooldown - 1)


@dataclass(slots=True)
class Source:
    id: str
    pos: RoomPosition
    energy: int = 3000


@dataclass(slots=True)
class Hostile:
    id: str
    pos: RoomPosition
    owner: str = "Invader"
    body: Tuple[str, ...] = ("attack", "move")
    boosts: Tuple[str, ...] = ()

    @property
    def dangerous(self) -> bool:
        return any(part in HARMFUL_PARTS for part in self.body)

    @property
    def is_player(self) -> bool:
        return self.owner not in NPC_USERNAMES


@dataclass(slots=True)
class Creep:
    name: str
    role: str
    colony: str
    pos: RoomPosition
    overlord: Optional[str] = None
    body: Tuple[str, ...] = ()
    ticks_to_live: int = 1500
    target: Optional[RoomPosition] = None


@dataclass(slots=True)
class Drop:
    id: str
    pos: RoomPosition
    resource_type: str = RESOURCE_ENERGY
    amount: int = 0


@dataclass(slots=True)
class Tombstone:
    id: str
    pos: RoomPosition
    store: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.store.values())


@dataclass(slots=True)
class Nuke:
    id: str
    pos: RoomPosition
    time_to_land: int = 50_000


@dataclass(slots=True)
class Marker:
    """A named anchor in the world from which a directive is built."""

    name: str
    kind: str
    pos: RoomPosition
    memory: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "BARRIER_KINDS",
    "Controller",
    "Creep",
    "Drop",
    "HARMFUL_PARTS",
    "Hostile",
    "Marker",
    "NPC_USERNAMES",
    "Nuke",
    "RESOURCE_ENERGY",
    "ReturnCode",
    "Source",
    "Structure",
    "StructureKind",
    "Tombstone",
]
