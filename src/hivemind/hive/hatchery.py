"""Colony spawning facility.

The hatchery is the producer the spawn allocator routes requests to.  It
exposes the narrow producer contract (``next_availability``, ``room`` and
``enqueue``) and turns the highest priority queued requests into creeps
when it runs at the end of the tick.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Dict, List, MutableMapping, Optional

from ..creeps.roles import Setups
from ..creeps.setup import CREEP_SPAWN_TIME, CreepSetup, body_cost
from ..memory import room_memory, wrap
from ..tasks.overlord import Overlord
from ..tasks.priorities import OverlordPriority
from ..world.objects import Creep, ReturnCode, Structure
from ..world.positions import RoomPosition
from ..world.room import Room
from .requests import SpawnRequest

if TYPE_CHECKING:
    from ..colony import Colony

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HatcherySettings:
    suppress_spawning: bool = False


class QueenOverlord(Overlord):
    """Keeps a queen alive to refill the hatchery."""

    def __init__(self, hatchery: "Hatchery", priority: int = OverlordPriority.core.queen) -> None:
        super().__init__(hatchery, "queen", priority)
        self.queen_setup: CreepSetup = Setups.queen

    def init(self) -> None:
        self.wishlist(1, self.queen_setup)

    def run(self) -> None:
        for queen in self._creeps:
            queen.target = self.pos


class Hatchery:
    def __init__(self, colony: "Colony", spawns: List[Structure]) -> None:
        if not spawns:
            raise ValueError(f"Hatchery in {colony.name} needs at least one spawn")
        self.colony = colony
        self.ctx = colony.ctx
        self.ref = f"{colony.ref}:hatchery"
        self.spawns = list(spawns)
        self.settings = HatcherySettings()
        self.queue: List[SpawnRequest] = []
        self._spawned_this_tick = 0
        self.overlord = QueenOverlord(self)

    def __repr__(self) -> str:
        return f"<Hatchery {self.colony.name} spawns={len(self.spawns)}>"

    @property
    def pos(self) -> RoomPosition:
        return self.spawns[0].pos

    @property
    def room(self) -> Room:
        return self.ctx.world.rooms[self.colony.name]

    @property
    def memory(self) -> MutableMapping[str, object]:
        return wrap(room_memory(self.ctx.memory, self.colony.name), "hatchery", {"busy_until": {}})

    @property
    def _busy_until(self) -> Dict[str, int]:
        return self.memory["busy_until"]  # type: ignore[return-value]

    def _remaining(self, spawn: Structure) -> int:
        return max(0, int(self._busy_until.get(spawn.id, 0)) - self.ctx.tick)

    @property
    def next_availability(self) -> float:
        """Expected ticks until a new request could start spawning."""

        active = sum(self._remaining(spawn) for spawn in self.spawns)
        queued = sum(
            len(request.setup.generate_body(self.room.energy_capacity_available)) * CREEP_SPAWN_TIME
            for request in self.queue
        )
        return (active + queued) / len(self.spawns)

    def enqueue(self, request: SpawnRequest) -> None:
        self.queue.append(request)

    def refresh(self, spawns: Optional[List[Structure]] = None) -> None:
        if spawns:
            self.spawns = list(spawns)
        self.queue = []
        self.settings.suppress_spawning = False
        self._spawned_this_tick = 0

    def init(self) -> None:
        live = {spawn.id for spawn in self.spawns}
        for spawn_id in list(self._busy_until):
            if spawn_id not in live or int(self._busy_until[spawn_id]) <= self.ctx.tick:
                del self._busy_until[spawn_id]

    def _creep_name(self, role: str) -> str:
        base = f"{role}_{self.colony.name}_{self.ctx.tick}"
        name = f"{base}_{self._spawned_this_tick}"
        while name in self.ctx.world.creeps:
            self._spawned_this_tick += 1
            name = f"{base}_{self._spawned_this_tick}"
        return name

    def spawn_creep(self, spawn: Structure, request: SpawnRequest) -> ReturnCode:
        room = self.room
        body = request.setup.generate_body(room.energy_capacity_available)
        if body_cost(body) > room.energy_available and request.options.get("flexible_energy"):
            body = request.setup.generate_body(room.energy_available)
        if not body or body_cost(body) > room.energy_available:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        name = self._creep_name(request.role)
        self.ctx.world.creeps[name] = Creep(
            name=name,
            role=request.role,
            colony=self.colony.name,
            pos=spawn.pos,
            overlord=request.overlord,
            body=tuple(body),
        )
        room.energy_available -= body_cost(body)
        self._busy_until[spawn.id] = self.ctx.tick + len(body) * CREEP_SPAWN_TIME
        self._spawned_this_tick += 1
        logger.debug("%s spawning %s for %s", self.colony.name, name, request.overlord)
        return ReturnCode.OK

    def run(self) -> None:
        requests = sorted(self.queue, key=lambda request: request.priority)
        # Requests are only good for the tick they were made in.
        self.queue = []
        if self.settings.suppress_spawning:
            requests = [r for r in requests if r.priority <= OverlordPriority.emergency.bootstrap]
        idle = [spawn for spawn in self.spawns if self._remaining(spawn) == 0]
        for request in requests:
            if not idle:
                break
            result = self.spawn_creep(idle[0], request)
            if result != ReturnCode.OK:
                # Lower priority requests wait behind the one we cannot afford yet.
                break
            idle.pop(0)


__all__ = ["Hatchery", "HatcherySettings", "QueenOverlord", "SpawnRequest"]
