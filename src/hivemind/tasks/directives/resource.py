from __future__ import annotations

import logging

from ...creeps.roles import Setups
from ...tasks.directive import Directive
from ...tasks.overlord import RoleOverlord
from ...tasks.priorities import OverlordPriority

logger = logging.getLogger(__name__)

EXTRACTION_REQUIRED_LEVEL = 6


class DirectiveExtract(Directive):
    """Mineral extraction at an extractor."""

    kind = "extract"

    def spawn_overlords(self) -> None:
        room = self.room
        if room is not None and room.my:
            if self.colony.level == 8:
                priority = OverlordPriority.owned_room.mineral_rcl8
            else:
                priority = OverlordPriority.owned_room.mineral
        else:
            priority = OverlordPriority.remote_sk_room.mineral
        self.overlords["extract"] = RoleOverlord(self, "extract", priority, Setups.extractor)

    def run(self) -> None:
        if self.colony.level < EXTRACTION_REQUIRED_LEVEL:
            logger.info("Removing extraction directive in %s: room level insufficient.", self.pos.room_name)
            self.remove()


__all__ = ["DirectiveExtract", "EXTRACTION_REQUIRED_LEVEL"]
