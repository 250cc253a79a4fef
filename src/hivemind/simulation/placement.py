"""Situational evaluators that place new directives.

Each evaluator looks at one colony and, when the world calls for it,
places a marker for a directive that is instantiated at the start of the
next tick.  All of them are safe to call every tick: directives are
created only if an equivalent one is not already present.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..colony import ColonyStage
from ..creeps.roles import Roles
from ..creeps.setup import body_cost
from ..intel import get_safety_data, get_sources, room_owned_by, room_reserved_by
from ..settings import Autonomy
from ..tasks.directive import SCOPE_POS, SCOPE_ROOM
from ..tasks.directives import (
    DirectiveBootstrap,
    DirectiveColonize,
    DirectiveGuard,
    DirectiveInvasionDefense,
    DirectiveNukeResponse,
    DirectiveOutpost,
    DirectiveOutpostDefense,
    DirectiveTerminalEvacuateState,
)
from ..utils import has_just_spawned
from ..world.cartographer import RoomType, find_rooms_in_range, room_type
from ..world.objects import ReturnCode
from ..world.pathing import distance, find_pathable_position, is_reachable
from ..world.positions import RoomPosition

if TYPE_CHECKING:
    from ..colony import Colony
    from .context import TickContext

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Economy
# ----------------------------------------------------------------------
def handle_bootstrapping(ctx: "TickContext", colony: "Colony") -> None:
    """Enter emergency spawning when the colony cannot afford a queen."""

    if colony.is_incubating:
        return
    hatchery = colony.hatchery
    room = colony.room
    if hatchery is None or room is None or colony.spawn_group is not None:
        return
    if colony.get_creeps_by_role(Roles.QUEEN):
        return
    setup = hatchery.overlord.queen_setup
    energy_to_make_queen = body_cost(setup.generate_body(room.energy_capacity_available))
    if room.energy_available < energy_to_make_queen or has_just_spawned(ctx):
        DirectiveBootstrap.create_if_not_present(ctx, hatchery.pos, SCOPE_POS)
        hatchery.settings.suppress_spawning = True


# ----------------------------------------------------------------------
# Defense
# ----------------------------------------------------------------------
def handle_outpost_defense(ctx: "TickContext", colony: "Colony") -> None:
    for room in colony.outposts:
        if room.dangerous_player_hostiles:
            pos = find_pathable_position(ctx.world, room.name)
            DirectiveOutpostDefense.create_if_not_present(ctx, pos, SCOPE_ROOM)
            return
        # Source keeper rooms can fend for themselves.
        if room_type(room.name) == RoomType.SOURCE_KEEPER:
            continue
        defended = [
            marker
            for marker in ctx.world.markers_in_room(room.name)
            if DirectiveGuard.filter(marker) or DirectiveOutpostDefense.filter(marker)
        ]
        if room.dangerous_hostiles and not defended:
            DirectiveGuard.create(ctx, room.dangerous_hostiles[0].pos)


def handle_colony_invasions(ctx: "TickContext", colony: "Colony") -> None:
    room = colony.room
    controller = colony.controller
    if room is None or controller is None or colony.level < DirectiveInvasionDefense.required_level:
        return
    settings = ctx.settings
    effective_count = sum(2 if hostile.boosts else 1 for hostile in room.hostiles)
    needs_defending = effective_count >= settings.invasion_threshold or bool(room.dangerous_player_hostiles)
    safety = get_safety_data(ctx.world, room.name)
    is_persistent = safety.unsafe_for > settings.invasion_persistence_ticks
    if needs_defending and is_persistent:
        DirectiveInvasionDefense.create_if_not_present(ctx, controller.pos, SCOPE_ROOM)


def handle_nuke_response(ctx: "TickContext", colony: "Colony") -> None:
    room = colony.room
    if room is None or colony.level < DirectiveNukeResponse.required_level:
        return
    for nuke in room.nukes:
        DirectiveNukeResponse.create_if_not_present(ctx, nuke.pos, SCOPE_POS)


# ----------------------------------------------------------------------
# Expansion
# ----------------------------------------------------------------------
def compute_possible_outposts(ctx: "TickContext", colony: "Colony", depth: Optional[int] = None) -> List[str]:
    world = ctx.world
    if depth is None:
        depth = ctx.settings.outpost_search_depth
    outpost_rooms = {
        marker.pos.room_name for marker in world.markers.values() if DirectiveOutpost.filter(marker)
    }
    colony_rooms = set(colony.room_names)
    candidates = []
    for room_name in find_rooms_in_range(colony.room_name, depth):
        if room_type(room_name) != RoomType.CONTROLLER:
            continue
        if room_name in outpost_rooms or room_name in ctx.colonies:
            continue
        if room_owned_by(world, room_name):
            continue
        if room_reserved_by(world, room_name) and not ctx.settings.disregard_reservations:
            continue
        exits = world.describe_exits(room_name).values()
        if not any(neighbor in colony_rooms for neighbor in exits):
            continue
        if world.is_room_available(room_name):
            candidates.append(room_name)
    return candidates


def mean_source_distance(
    ctx: "TickContext",
    origin: RoomPosition,
    room_name: str,
    max_source_distance: int,
) -> Optional[float]:
    """Mean path distance to the room's sources, or ``None`` if unsuitable."""

    sources = get_sources(ctx.world, room_name)
    if not sources:
        return None
    distances = []
    for pos in sources:
        found = distance(ctx.world, origin, pos)
        if found is None or found > max_source_distance:
            return None
        distances.append(found)
    return sum(distances) / len(distances)


def handle_new_outposts(ctx: "TickContext", colony: "Colony") -> Optional[str]:
    room = colony.room
    if room is None:
        return None
    num_sources = sum(len(get_sources(ctx.world, name) or []) for name in colony.room_names)
    num_remotes = num_sources - len(room.sources)
    target = colony.settings.remote_sources_by_level.get(colony.level, 0)
    if num_remotes >= target:
        return None
    origin = colony.pos
    scored = []
    for room_name in compute_possible_outposts(ctx, colony):
        score = mean_source_distance(ctx, origin, room_name, colony.settings.max_source_distance)
        if score is not None:
            scored.append((room_name, score))
    best = min(scored, key=lambda item: item[1], default=None)
    if best is None:
        return None
    pos = find_pathable_position(ctx.world, best[0])
    logger.info("Colony %s now remote mining from %s", colony.name, pos)
    return DirectiveOutpost.create_if_not_present(ctx, pos, SCOPE_ROOM, memory={"colony": colony.name})


def handle_pioneers(ctx: "TickContext", colony: "Colony") -> None:
    """Send pioneers when a colony has lost every spawn."""

    if ctx.tick % ctx.settings.pioneer_check_frequency != 0 or colony.spawns:
        return
    room = colony.room
    # The cached spawn list can lag behind; confirm with a fresh query.
    if room is None or room.find_my_spawns():
        return
    pos = find_pathable_position(ctx.world, colony.room_name)
    DirectiveColonize.create_if_not_present(ctx, pos, SCOPE_ROOM)


def place_directives(ctx: "TickContext", colony: "Colony") -> None:
    handle_bootstrapping(ctx, colony)
    handle_outpost_defense(ctx, colony)
    handle_colony_invasions(ctx, colony)
    handle_nuke_response(ctx, colony)
    if ctx.settings.autonomy > Autonomy.MANUAL:
        if ctx.tick % ctx.settings.outpost_check_frequency == 2 * colony.id:
            handle_new_outposts(ctx, colony)
        handle_pioneers(ctx, colony)


# ----------------------------------------------------------------------
# Safe mode
# ----------------------------------------------------------------------
def _respond_to_threat(ctx: "TickContext", colony: "Colony") -> bool:
    """Activate safe mode or fall back to evacuating; ``True`` once decided."""

    controller = colony.controller
    if controller is None:
        return False
    result = controller.activate_safe_mode()
    if result == ReturnCode.OK:
        logger.warning("Activated safe mode in %s", colony.name)
        return True
    if controller.safe_mode > 0:
        return True
    terminal = colony.terminal
    if terminal is not None:
        DirectiveTerminalEvacuateState.create_if_not_present(ctx, terminal.pos, SCOPE_ROOM)
        return True
    return False


def handle_safe_mode(ctx: "TickContext", colony: "Colony") -> None:
    if colony.stage == ColonyStage.LARVA and ctx.settings.public_server:
        return
    room = colony.room
    if room is None or colony.controller is None:
        return
    hostiles = room.dangerous_hostiles
    if not hostiles:
        return
    critical = [*colony.spawns, colony.storage, colony.terminal]
    for structure in critical:
        if structure is None or not structure.damaged:
            continue
        if structure.pos.find_in_range(hostiles, ctx.settings.safe_mode_hostile_range):
            if _respond_to_threat(ctx, colony):
                return
    if colony.spawns:
        barriers = [barrier.pos for barrier in room.barriers]
        if is_reachable(ctx.world, hostiles[0].pos, colony.spawns[0].pos, barriers):
            _respond_to_threat(ctx, colony)


__all__ = [
    "compute_possible_outposts",
    "handle_bootstrapping",
    "handle_colony_invasions",
    "handle_new_outposts",
    "handle_nuke_response",
    "handle_outpost_defense",
    "handle_pioneers",
    "handle_safe_mode",
    "mean_source_distance",
    "place_directives",
]
