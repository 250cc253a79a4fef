from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .objects import (
    BARRIER_KINDS,
    Controller,
    Drop,
    Hostile,
    Nuke,
    Source,
    Structure,
    StructureKind,
    Tombstone,
)


@dataclass(slots=True)
class Room:
    """Snapshot of a visible room."""

    name: str
    controller: Optional[Controller] = None
    structures: List[Structure] = field(default_factory=list)
    sources: List[Source] = field(default_factory=list)
    hostiles: List[Hostile] = field(default_factory=list)
    drops: List[Drop] = field(default_factory=list)
    tombstones: List[Tombstone] = field(default_factory=list)
    nukes: List[Nuke] = field(default_factory=list)
    energy_available: int = 0
    energy_capacity_available: int = 0

    @property
    def my(self) -> bool:
        return self.controller is not None and self.controller.my

    @property
    def level(self) -> int:
        return self.controller.level if self.controller is not None else 0

    def _my_structures(self, kind: StructureKind) -> List[Structure]:
        return [s for s in self.structures if s.kind == kind and s.my]

    @property
    def spawns(self) -> List[Structure]:
        return self._my_structures(StructureKind.SPAWN)

    def find_my_spawns(self) -> List[Structure]:
        """Uncached spawn query, filtering out destroyed spawns."""

        return [s for s in self._my_structures(StructureKind.SPAWN) if s.hits > 0]

    @property
    def storage(self) -> Optional[Structure]:
        found = self._my_structures(StructureKind.STORAGE)
        return found[0] if found else None

    @property
    def terminal(self) -> Optional[Structure]:
        found = self._my_structures(StructureKind.TERMINAL)
        return found[0] if found else None

    @property
    def barriers(self) -> List[Structure]:
        return [s for s in self.structures if s.kind in BARRIER_KINDS]

    @property
    def dangerous_hostiles(self) -> List[Hostile]:
        return [h for h in self.hostiles if h.dangerous]

    @property
    def dangerous_player_hostiles(self) -> List[Hostile]:
        return [h for h in self.hostiles if h.dangerous and h.is_player]

    @property
    def drops_by_type(self) -> Dict[str, List[Drop]]:
        grouped: Dict[str, List[Drop]] = defaultdict(list)
        for drop in self.drops:
            grouped[drop.resource_type].append(drop)
        return dict(grouped)


__all__ = ["Room"]
