"""Decentralized spawning from several nearby colonies.

A spawn group is anchored to a room.  Every group anchored to the same room
shares one cached record of the colonies that could reach it, which is
recomputed from scratch when it expires.  Requests buffered during the tick
are handed to the hatchery with the least expected wait when the group
initializes, which must happen after every hatchery has initialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from random import Random
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Tuple

from ..creeps.setup import body_cost
from ..hive.requests import SpawnRequest
from ..memory import room_memory
from ..utils import get_cache_expiration
from ..world.cartographer import linear_distance
from ..world.pathing import find_path_to_room, find_route

if TYPE_CHECKING:
    from ..hive.hatchery import Hatchery
    from ..state import WorldState

logger = logging.getLogger(__name__)

MAX_LINEAR_DISTANCE: int = 10
MAX_PATH_DISTANCE: int = 600
HANDOFF_DISTANCE: int = 25
RECACHE_JITTER: int = 25
DEFAULT_AVG_DISTANCE: float = 100.0

MEMORY_KEY = "spawn_group"


@dataclass(slots=True)
class SpawnGroupSettings:
    max_path_distance: int = 250
    required_level: int = 7
    flexible_energy: bool = True


@dataclass(slots=True)
class SpawnGroupRecord:
    colonies: List[str] = field(default_factory=list)
    distances: Dict[str, int] = field(default_factory=dict)
    routes: Dict[str, Dict[str, bool]] = field(default_factory=dict)
    expiration: int = 0

    def to_memory(self) -> Dict[str, Any]:
        return {
            "colonies": list(self.colonies),
            "distances": dict(self.distances),
            "routes": {name: dict(route) for name, route in self.routes.items()},
            "expiration": self.expiration,
        }

    @classmethod
    def from_memory(cls, raw: Optional[Mapping[str, Any]]) -> "SpawnGroupRecord":
        if not raw:
            return cls()
        return cls(
            colonies=list(raw.get("colonies", [])),
            distances={name: int(value) for name, value in (raw.get("distances") or {}).items()},
            routes={name: dict(route) for name, route in (raw.get("routes") or {}).items()},
            expiration=int(raw.get("expiration", 0)),
        )


class SpawnGroupCache:
    """Read-through store of spawn group records keyed by anchor room."""

    def __init__(self, memory: MutableMapping[str, Any]) -> None:
        self.memory = memory

    def read(self, room_name: str) -> SpawnGroupRecord:
        return SpawnGroupRecord.from_memory(room_memory(self.memory, room_name).get(MEMORY_KEY))

    def write(self, room_name: str, record: SpawnGroupRecord) -> None:
        room_memory(self.memory, room_name)[MEMORY_KEY] = record.to_memory()

    def fetch(self, room_name: str, tick: int, compute: Callable[[], SpawnGroupRecord]) -> SpawnGroupRecord:
        record = self.read(room_name)
        if tick >= record.expiration:
            record = compute()
            self.write(room_name, record)
        return record


def compute_spawn_group_record(
    world: "WorldState",
    room_name: str,
    *,
    recache_time: int,
    rng: Random,
) -> SpawnGroupRecord:
    """Find every colony that can reach ``room_name``.

    Uses the fixed module bounds rather than any group's settings, since the
    result is shared by all groups at the anchor.
    """

    record = SpawnGroupRecord()
    for room in world.owned_rooms():
        if linear_distance(room.name, room_name) > MAX_LINEAR_DISTANCE:
            continue
        spawns = room.spawns
        if not spawns:
            continue
        route = find_route(world, room.name, room_name)
        if route is None:
            continue
        path = find_path_to_room(world, spawns[0].pos, room_name, route=route)
        if path.incomplete or path.length > MAX_PATH_DISTANCE:
            continue
        record.colonies.append(room.name)
        record.routes[room.name] = route
        record.distances[room.name] = path.length
    record.expiration = get_cache_expiration(world.tick, recache_time, RECACHE_JITTER, rng)
    return record


@dataclass(slots=True)
class SpawnGroupStats:
    avg_distance: float = DEFAULT_AVG_DISTANCE


class SpawnGroup:
    def __init__(self, initializer: Any, settings: Optional[SpawnGroupSettings] = None) -> None:
        self.ctx = initializer.ctx
        self.room_name: str = initializer.pos.room_name
        self.ref = f"{initializer.ref}:SG"
        self.settings = settings if settings is not None else SpawnGroupSettings()
        self.cache = SpawnGroupCache(self.ctx.memory)
        self.requests: List[SpawnRequest] = []
        self.stats = SpawnGroupStats()
        self.colony_names: List[str] = []
        self.energy_capacity_available = 0
        self.record = self._fetch()
        self._derive()
        self.ctx.spawn_groups[self.ref] = self

    def __repr__(self) -> str:
        return f"<SpawnGroup {self.ref} colonies={self.colony_names}>"

    def _compute(self) -> SpawnGroupRecord:
        return compute_spawn_group_record(
            self.ctx.world,
            self.room_name,
            recache_time=self.ctx.settings.spawn_group_recache_time,
            rng=self.ctx.rng,
        )

    def _fetch(self) -> SpawnGroupRecord:
        return self.cache.fetch(self.room_name, self.ctx.tick, self._compute)

    def recompute(self) -> SpawnGroupRecord:
        self.record = self._compute()
        self.cache.write(self.room_name, self.record)
        self._derive()
        return self.record

    def _derive(self) -> None:
        distances = self.record.distances
        self.stats.avg_distance = (
            sum(distances.values()) / len(distances) if distances else DEFAULT_AVG_DISTANCE
        )
        rooms = self.ctx.world.rooms
        self.colony_names = [
            name
            for name in self.record.colonies
            if name in distances
            and distances[name] <= self.settings.max_path_distance
            and name in rooms
            and rooms[name].my
            and rooms[name].level >= self.settings.required_level
        ]
        self.energy_capacity_available = max(
            (rooms[name].energy_capacity_available for name in self.colony_names), default=0
        )

    def refresh(self) -> None:
        self.record = self._fetch()
        self.requests = []
        self._derive()

    def enqueue(self, request: SpawnRequest) -> None:
        self.requests.append(request)

    def _hatcheries(self) -> List[Tuple[str, "Hatchery"]]:
        found = []
        for name in self.colony_names:
            colony = self.ctx.colonies.get(name)
            # The cache can outlive a colony's spawns.
            if colony is not None and colony.hatchery is not None and colony.spawns:
                found.append((name, colony.hatchery))
        return found

    def init(self) -> None:
        hatcheries = self._hatcheries()
        distances = self.record.distances

        def expected_wait(candidate: Tuple[str, "Hatchery"]) -> float:
            name, hatchery = candidate
            return hatchery.next_availability + distances[name] + HANDOFF_DISTANCE

        for request in self.requests:
            max_cost = body_cost(request.setup.generate_body(self.energy_capacity_available))
            affordable = [
                candidate
                for candidate in hatcheries
                if candidate[1].room.energy_capacity_available >= max_cost
            ]
            best = min(affordable, key=expected_wait, default=None)
            if best is None:
                logger.warning(
                    "Could not enqueue creep %s from spawn group in %s", request.setup.role, self.room_name
                )
                continue
            if self.settings.flexible_energy:
                request.options.setdefault("flexible_energy", True)
            best[1].enqueue(request)

    def run(self) -> None:
        pass


__all__ = [
    "HANDOFF_DISTANCE",
    "MAX_LINEAR_DISTANCE",
    "MAX_PATH_DISTANCE",
    "SpawnGroup",
    "SpawnGroupCache",
    "SpawnGroupRecord",
    "SpawnGroupSettings",
    "SpawnGroupStats",
    "compute_spawn_group_record",
]
