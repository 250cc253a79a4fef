"""Colonies: an owned room, its outposts and its facilities."""

from __future__ import annotations

from enum import Enum
import logging
from typing import TYPE_CHECKING, Any, List, Optional

from .hive.hatchery import Hatchery
from .logistics.network import LogisticsNetwork
from .logistics.spawn_group import SpawnGroup, SpawnGroupSettings
from .memory import room_memory
from .settings import ColonySettings
from .world.objects import Controller, Creep, Structure, Tombstone
from .world.positions import RoomPosition, deref_coords
from .world.room import Room

if TYPE_CHECKING:
    from .simulation.context import TickContext

logger = logging.getLogger(__name__)

OUTPOST_MARKER_KIND = "outpost"

# Colonies without a spawn borrow from neighbours that have reached this level.
INCUBATION_REQUIRED_LEVEL = 4


class ColonyStage(str, Enum):
    LARVA = "larva"
    PUPA = "pupa"
    ADULT = "adult"


class Colony:
    def __init__(
        self,
        ctx: "TickContext",
        id: int,
        room_name: str,
        settings: Optional[ColonySettings] = None,
    ) -> None:
        self.ctx = ctx
        self.id = id
        self.name = room_name
        self.ref = room_name
        self.room_name = room_name
        self.settings = settings if settings is not None else ColonySettings()
        self.logistics_network = LogisticsNetwork(self)
        self.hatchery: Optional[Hatchery] = None
        self.spawn_group: Optional[SpawnGroup] = None
        self.spawns: List[Structure] = []
        self.storage: Optional[Structure] = None
        self.terminal: Optional[Structure] = None
        self._structures_cached_at: Optional[int] = None
        self._recache_structures()
        self._build_facilities()
        ctx.colonies[self.name] = self

    def __repr__(self) -> str:
        return f"<Colony {self.name} id={self.id} level={self.level}>"

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------
    @property
    def colony(self) -> "Colony":
        return self

    @property
    def room(self) -> Optional[Room]:
        return self.ctx.world.rooms.get(self.room_name)

    @property
    def controller(self) -> Optional[Controller]:
        room = self.room
        return room.controller if room is not None else None

    @property
    def level(self) -> int:
        room = self.room
        return room.level if room is not None else 0

    @property
    def outpost_names(self) -> List[str]:
        names: List[str] = []
        for marker in self.ctx.world.markers.values():
            if marker.kind != OUTPOST_MARKER_KIND or marker.memory.get("colony") != self.name:
                continue
            if marker.pos.room_name not in names:
                names.append(marker.pos.room_name)
        return names

    @property
    def outposts(self) -> List[Room]:
        """Outpost rooms that are currently visible."""

        rooms = self.ctx.world.rooms
        return [rooms[name] for name in self.outpost_names if name in rooms]

    @property
    def room_names(self) -> List[str]:
        return [self.room_name, *self.outpost_names]

    @property
    def rooms(self) -> List[Room]:
        rooms = self.ctx.world.rooms
        return [rooms[name] for name in self.room_names if name in rooms]

    @property
    def stage(self) -> ColonyStage:
        if self.storage is None:
            return ColonyStage.LARVA
        if self.level < 8:
            return ColonyStage.PUPA
        return ColonyStage.ADULT

    @property
    def pos(self) -> RoomPosition:
        if self.storage is not None:
            return self.storage.pos
        if self.spawns:
            return self.spawns[0].pos
        controller = self.controller
        if controller is not None:
            return controller.pos
        return RoomPosition(25, 25, self.room_name)

    @property
    def is_incubating(self) -> bool:
        return self.spawn_group is not None

    @property
    def bunker_anchor(self) -> Optional[RoomPosition]:
        coords = room_memory(self.ctx.memory, self.room_name).get("bunker")
        if not coords:
            return None
        return deref_coords(str(coords), self.room_name)

    @property
    def tombstones(self) -> List[Tombstone]:
        return [tombstone for room in self.rooms for tombstone in room.tombstones]

    def get_creeps_by_role(self, role: str) -> List[Creep]:
        return [
            creep
            for _, creep in sorted(self.ctx.world.creeps.items())
            if creep.colony == self.name and creep.role == role
        ]

    # ------------------------------------------------------------------
    # Facilities
    # ------------------------------------------------------------------
    def _recache_structures(self) -> None:
        room = self.room
        self.spawns = list(room.spawns) if room is not None else []
        self.storage = room.storage if room is not None else None
        self.terminal = room.terminal if room is not None else None
        self._structures_cached_at = self.ctx.tick

    def _structures_expired(self) -> bool:
        if self._structures_cached_at is None:
            return True
        return self.ctx.tick - self._structures_cached_at >= self.settings.structure_recache_ticks

    def _build_facilities(self) -> None:
        if self.spawns and self.hatchery is None:
            self.hatchery = Hatchery(self, self.spawns)
        if not self.spawns and self.hatchery is not None:
            self.ctx.overseer._remove_overlord(self.hatchery.overlord)
            self.hatchery = None
            logger.warning("Colony %s lost its last spawn; hatchery shut down", self.name)
        if not self.spawns and self.spawn_group is None:
            self.spawn_group = SpawnGroup(self, SpawnGroupSettings(required_level=INCUBATION_REQUIRED_LEVEL))
            logger.info("Colony %s has no spawns; incubating from %s", self.name, self.spawn_group.ref)
        if self.spawns and self.spawn_group is not None:
            self.ctx.spawn_groups.pop(self.spawn_group.ref, None)
            self.spawn_group = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        if self._structures_expired():
            self._recache_structures()
            self._build_facilities()
        self.logistics_network.refresh()
        if self.hatchery is not None:
            self.hatchery.refresh(self.spawns)

    def init(self) -> None:
        if self.hatchery is not None and self.spawns:
            self.hatchery.init()

    def run(self) -> None:
        if self.hatchery is not None and self.spawns:
            self.hatchery.run()

    def summary(self) -> dict[str, Any]:
        room = self.room
        return {
            "name": self.name,
            "level": self.level,
            "stage": self.stage.value,
            "outposts": self.outpost_names,
            "energy": room.energy_available if room is not None else 0,
            "capacity": room.energy_capacity_available if room is not None else 0,
            "incubating": self.is_incubating,
        }


__all__ = ["Colony", "ColonyStage", "INCUBATION_REQUIRED_LEVEL", "OUTPOST_MARKER_KIND"]
