"""Directives: standing intents anchored to a marker in the world.

A directive is instantiated from a marker, registers itself with the
overseer and builds the overlords it owns.  It goes away when its marker
is removed, either by its own logic through :meth:`Directive.remove` or
from outside, and takes its overlords with it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, MutableMapping, Optional

from ..world.cartographer import linear_distance
from ..world.objects import Marker
from ..world.positions import RoomPosition
from ..world.room import Room
from .overlord import Overlord

if TYPE_CHECKING:
    from ..colony import Colony
    from ..logistics.spawn_group import SpawnGroup
    from ..simulation.context import TickContext

logger = logging.getLogger(__name__)

MAX_COLONY_DISTANCE = 10

SCOPE_POS = "pos"
SCOPE_ROOM = "room"


def directive_name(kind: str, pos: RoomPosition) -> str:
    return f"{kind}@{pos.room_name}:{pos.x}:{pos.y}"


class Directive:
    kind: ClassVar[str] = ""
    required_level: ClassVar[int] = 0

    def __init__(self, ctx: "TickContext", marker: Marker, colony: Optional["Colony"] = None) -> None:
        self.ctx = ctx
        self.marker = marker
        self.name = marker.name
        self.ref = marker.name
        self.pos = marker.pos
        self.memory: MutableMapping[str, Any] = marker.memory
        self.memory.setdefault("created", ctx.tick)
        self.colony = colony if colony is not None else self.resolve_colony(ctx, marker)
        self.overlords: Dict[str, Overlord] = {}
        self.spawn_group: Optional["SpawnGroup"] = None
        self.removed = False
        ctx.overseer.register_directive(self)
        ctx.directives[self.name] = self
        self.spawn_overlords()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------
    @classmethod
    def resolve_colony(cls, ctx: "TickContext", marker: Marker) -> Optional["Colony"]:
        """The colony that should service a marker.

        An explicit ``colony`` in marker memory wins, then the colony that
        owns the room or operates it as an outpost, then the closest colony
        of sufficient level.
        """

        named = marker.memory.get("colony")
        if named is not None and named in ctx.colonies:
            return ctx.colonies[str(named)]
        room_name = marker.pos.room_name
        if room_name in ctx.colonies:
            return ctx.colonies[room_name]
        for colony in ctx.colonies.values():
            if room_name in colony.outpost_names:
                return colony
        nearby = [
            (linear_distance(room_name, colony.name), colony.name, colony)
            for colony in ctx.colonies.values()
            if colony.level >= cls.required_level
            and linear_distance(room_name, colony.name) <= MAX_COLONY_DISTANCE
        ]
        if not nearby:
            return None
        return min(nearby, key=lambda item: (item[0], item[1]))[2]

    @classmethod
    def from_marker(cls, ctx: "TickContext", marker: Marker) -> Optional["Directive"]:
        colony = cls.resolve_colony(ctx, marker)
        if colony is None:
            logger.warning("No colony can service %s; removing marker", marker.name)
            ctx.world.remove_marker(marker.name)
            return None
        return cls(ctx, marker, colony)

    @classmethod
    def filter(cls, marker: Marker) -> bool:
        return marker.kind == cls.kind

    @classmethod
    def find_in_room(cls, ctx: "TickContext", room_name: str) -> List[Marker]:
        return [marker for marker in ctx.world.markers_in_room(room_name) if cls.filter(marker)]

    @classmethod
    def is_present(cls, ctx: "TickContext", pos: RoomPosition, scope: str) -> bool:
        markers = cls.find_in_room(ctx, pos.room_name)
        if scope == SCOPE_ROOM:
            return bool(markers)
        if scope == SCOPE_POS:
            return any(marker.pos == pos for marker in markers)
        raise ValueError(f"Unknown directive scope: {scope!r}")

    @classmethod
    def create(
        cls,
        ctx: "TickContext",
        pos: RoomPosition,
        memory: Optional[MutableMapping[str, Any]] = None,
    ) -> Optional[str]:
        """Place a marker for a new directive; it is built on the next sync."""

        payload = dict(memory or {})
        payload.setdefault("created", ctx.tick)
        name = ctx.world.create_marker(pos, cls.kind, directive_name(cls.kind, pos), payload)
        if name is not None:
            logger.info("Creating %s directive at %s", cls.kind, pos)
        return name

    @classmethod
    def create_if_not_present(
        cls,
        ctx: "TickContext",
        pos: RoomPosition,
        scope: str,
        memory: Optional[MutableMapping[str, Any]] = None,
    ) -> Optional[str]:
        if cls.is_present(ctx, pos, scope):
            return None
        return cls.create(ctx, pos, memory)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def room(self) -> Optional[Room]:
        return self.ctx.world.rooms.get(self.pos.room_name)

    @property
    def created(self) -> int:
        return int(self.memory.get("created", self.ctx.tick))

    @property
    def age(self) -> int:
        return self.ctx.tick - self.created

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def spawn_overlords(self) -> None:
        pass

    def remove(self) -> None:
        if self.removed:
            return
        self.removed = True
        self.ctx.overseer.remove_directive(self)
        self.ctx.directives.pop(self.name, None)
        self.ctx.world.remove_marker(self.name)
        logger.info("Removed directive %s", self.name)

    def init(self) -> None:
        pass

    def run(self) -> None:
        pass

    def visuals(self) -> List[str]:
        labels = [f"{self.kind} {self.pos}"]
        labels.extend(f"  {role}: {overlord.ref}" for role, overlord in self.overlords.items())
        return labels


__all__ = ["Directive", "SCOPE_POS", "SCOPE_ROOM", "directive_name"]
