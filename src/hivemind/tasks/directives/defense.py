"""Defensive directives for colony rooms and outposts."""

from __future__ import annotations

from ...creeps.roles import Setups
from ...intel import get_safety_data
from ...tasks.directive import Directive
from ...tasks.overlord import RoleOverlord
from ...tasks.priorities import OverlordPriority

# Consecutive quiet ticks before an invasion response stands down.
STANDDOWN_TICKS = 100


class DirectiveGuard(Directive):
    """Sends a guard after NPC invaders in an outpost."""

    kind = "guard"

    def spawn_overlords(self) -> None:
        self.overlords["guard"] = RoleOverlord(
            self, "guard", OverlordPriority.outpost_defense.guard, Setups.guard
        )

    def run(self) -> None:
        room = self.room
        if room is not None and not room.dangerous_hostiles:
            self.remove()


class DirectiveOutpostDefense(Directive):
    """Defends an outpost against another player's creeps."""

    kind = "outpostDefense"

    def spawn_overlords(self) -> None:
        self.overlords["outpost_defense"] = RoleOverlord(
            self,
            "outpost_defense",
            OverlordPriority.outpost_defense.outpost_defense,
            Setups.ranged,
            quantity=2,
        )

    def run(self) -> None:
        room = self.room
        if room is not None and not room.dangerous_hostiles:
            self.remove()


class DirectiveInvasionDefense(Directive):
    kind = "invasionDefense"
    required_level = 3

    def spawn_overlords(self) -> None:
        self.overlords["melee"] = RoleOverlord(self, "melee", OverlordPriority.defense.melee, Setups.melee)
        self.overlords["ranged"] = RoleOverlord(self, "ranged", OverlordPriority.defense.ranged, Setups.ranged)

    def run(self) -> None:
        room = self.room
        if room is None or room.hostiles:
            return
        if get_safety_data(self.ctx.world, room.name).safe_for > STANDDOWN_TICKS:
            self.remove()


__all__ = ["DirectiveGuard", "DirectiveInvasionDefense", "DirectiveOutpostDefense", "STANDDOWN_TICKS"]
