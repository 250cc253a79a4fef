"""Overlords: prioritized units of recurring work.

An overlord is created by a directive (or a colony facility) while that
owner builds itself, and registers with the overseer immediately.  Its
priority is fixed at construction; the overseer relies on that to sort the
overlord list only when the registered set changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..creeps.setup import CreepSetup
from ..hive.requests import SpawnRequest
from ..world.objects import Creep
from ..world.positions import RoomPosition

if TYPE_CHECKING:
    from ..hive.hatchery import Hatchery
    from ..logistics.spawn_group import SpawnGroup

logger = logging.getLogger(__name__)


class Overlord:
    def __init__(self, initializer: Any, name: str, priority: int) -> None:
        self.initializer = initializer
        self.ctx = initializer.ctx
        self.name = name
        self.ref = f"{initializer.ref}>{name}"
        self._priority = priority
        self.colony = initializer.colony
        self.spawn_group: Optional["SpawnGroup"] = None
        self.creep_usage_report: Dict[str, Optional[Tuple[int, int]]] = {}
        self._creeps: List[Creep] = []
        self.ctx.overseer.register_overlord(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.ref} priority={self._priority}>"

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def pos(self) -> RoomPosition:
        return self.initializer.pos

    @property
    def is_suspended(self) -> bool:
        return self.ctx.overseer.is_suspended(self)

    def suspend_for(self, ticks: int) -> None:
        self.ctx.overseer.suspend_for(self, ticks)

    def suspend_until(self, tick: int) -> None:
        self.ctx.overseer.suspend_until(self, tick)

    def creeps(self, role: Optional[str] = None) -> List[Creep]:
        return [
            creep
            for _, creep in sorted(self.ctx.world.creeps.items())
            if creep.overlord == self.ref and (role is None or creep.role == role)
        ]

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _spawner(self) -> "Optional[SpawnGroup | Hatchery]":
        if self.spawn_group is not None:
            return self.spawn_group
        if self.colony is None:
            return None
        if self.colony.spawn_group is not None:
            return self.colony.spawn_group
        return self.colony.hatchery

    def request_creep(self, setup: CreepSetup, *, priority: Optional[int] = None, **options: Any) -> bool:
        spawner = self._spawner()
        if spawner is None:
            logger.debug("%s has nowhere to spawn %s", self.ref, setup.role)
            return False
        spawner.enqueue(
            SpawnRequest(
                setup=setup,
                overlord=self.ref,
                priority=self._priority if priority is None else priority,
                options=dict(options),
            )
        )
        return True

    def wishlist(self, quantity: int, setup: CreepSetup, **options: Any) -> None:
        """Keep ``quantity`` creeps of ``setup.role`` alive, one request per tick."""

        current = sum(1 for creep in self._creeps if creep.role == setup.role)
        self.creep_usage_report[setup.role] = (current, quantity)
        if current < quantity:
            self.request_creep(setup, **options)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def pre_init(self) -> None:
        self._creeps = self.creeps()

    def init(self) -> None:
        raise NotImplementedError

    def run(self) -> None:
        raise NotImplementedError

    def visuals(self) -> List[str]:
        return []


class RoleOverlord(Overlord):
    """Maintains a fixed number of creeps of one role and sends them to its owner."""

    def __init__(self, initializer: Any, name: str, priority: int, setup: CreepSetup, quantity: int = 1) -> None:
        super().__init__(initializer, name, priority)
        self.setup = setup
        self.quantity = quantity

    def init(self) -> None:
        self.wishlist(self.quantity, self.setup)

    def run(self) -> None:
        for creep in self._creeps:
            creep.target = self.pos


__all__ = ["Overlord", "RoleOverlord"]
