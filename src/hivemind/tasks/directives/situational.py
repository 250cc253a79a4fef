from __future__ import annotations

from typing import List

from ...creeps.roles import Roles, Setups
from ...creeps.setup import body_cost
from ...tasks.directive import Directive
from ...tasks.overlord import Overlord
from ...tasks.priorities import OverlordPriority

BOOTSTRAP_FILLERS = 2
BOOTSTRAP_MINERS = 1


class BootstrapOverlord(Overlord):
    """Spawns whatever small creeps the energy on hand allows."""

    def __init__(self, directive: "DirectiveBootstrap") -> None:
        super().__init__(directive, "bootstrap", OverlordPriority.emergency.bootstrap)

    def init(self) -> None:
        self.wishlist(BOOTSTRAP_FILLERS, Setups.filler, flexible_energy=True)
        self.wishlist(BOOTSTRAP_MINERS, Setups.miner, flexible_energy=True)

    def run(self) -> None:
        for creep in self._creeps:
            creep.target = self.pos


class DirectiveBootstrap(Directive):
    """Emergency spawn mode after a colony has lost its economy."""

    kind = "bootstrap"

    def spawn_overlords(self) -> None:
        self.overlords["bootstrap"] = BootstrapOverlord(self)

    def _queen_cost(self) -> int:
        hatchery = self.colony.hatchery
        room = self.colony.room
        if hatchery is None or room is None:
            return 0
        return body_cost(hatchery.overlord.queen_setup.generate_body(room.energy_capacity_available))

    def init(self) -> None:
        if self.colony.hatchery is not None:
            self.colony.hatchery.settings.suppress_spawning = True

    def run(self) -> None:
        room = self.colony.room
        if self.colony.hatchery is None or room is None:
            self.remove()
            return
        if self.colony.get_creeps_by_role(Roles.QUEEN) or room.energy_available >= self._queen_cost():
            self.remove()


class DirectiveNukeResponse(Directive):
    """Marks an incoming nuke's landing site until it has landed."""

    kind = "nukeResponse"
    required_level = 6

    def _incoming(self) -> List[int]:
        room = self.room
        if room is None:
            return []
        return [nuke.time_to_land for nuke in room.nukes if nuke.pos == self.pos]

    def init(self) -> None:
        incoming = self._incoming()
        if incoming:
            self.memory["time_to_land"] = min(incoming)

    def run(self) -> None:
        if self.room is not None and not self._incoming():
            self.remove()

    def visuals(self) -> List[str]:
        labels = super().visuals()
        if "time_to_land" in self.memory:
            labels.append(f"  lands in {self.memory['time_to_land']}")
        return labels


__all__ = ["BootstrapOverlord", "DirectiveBootstrap", "DirectiveNukeResponse"]
