"""Directives that grow a colony: outposts and new claims."""

from __future__ import annotations

import logging

from ...creeps.roles import Setups
from ...intel import get_sources, room_owned_by
from ...logistics.spawn_group import SpawnGroup
from ...tasks.directive import Directive
from ...tasks.overlord import RoleOverlord
from ...tasks.priorities import OverlordPriority

logger = logging.getLogger(__name__)

PIONEERS = 2


class DirectiveOutpost(Directive):
    """Remote room the colony reserves and mines."""

    kind = "outpost"

    def spawn_overlords(self) -> None:
        sources = get_sources(self.ctx.world, self.pos.room_name) or []
        self.overlords["reserve"] = RoleOverlord(
            self, "reserve", OverlordPriority.remote_room.reserve, Setups.reserver
        )
        self.overlords["mine"] = RoleOverlord(
            self, "mine", OverlordPriority.remote_room.mine, Setups.miner, quantity=max(1, len(sources))
        )

    def run(self) -> None:
        owner = room_owned_by(self.ctx.world, self.pos.room_name)
        if owner is not None:
            logger.info("Outpost %s was claimed by %s", self.pos.room_name, owner)
            self.remove()


class DirectiveColonize(Directive):
    """Claims a room and builds its first spawn with help from nearby colonies."""

    kind = "colonize"

    def spawn_overlords(self) -> None:
        self.spawn_group = SpawnGroup(self)
        room = self.room
        claimers = 0 if room is not None and room.my else 1
        self.overlords["claim"] = RoleOverlord(
            self, "claim", OverlordPriority.colonization.claim, Setups.claimer, quantity=claimers
        )
        self.overlords["pioneer"] = RoleOverlord(
            self, "pioneer", OverlordPriority.colonization.pioneer, Setups.pioneer, quantity=PIONEERS
        )
        for overlord in self.overlords.values():
            overlord.spawn_group = self.spawn_group

    def run(self) -> None:
        room = self.room
        if room is not None and room.my and room.find_my_spawns():
            logger.info("Colony in %s has a spawn again", self.pos.room_name)
            self.remove()


__all__ = ["DirectiveColonize", "DirectiveOutpost", "PIONEERS"]
