import logging

import pytest

from hivemind.colony import Colony
from hivemind.scenarios import build_owned_room, build_remote_room, build_world
from hivemind.simulation.context import TickContext
from hivemind.simulation.engine import SimulationEngine
from hivemind.simulation.overseer import Overseer
from hivemind.tasks.directive import SCOPE_POS, SCOPE_ROOM, directive_name
from hivemind.tasks.directives import (
    DIRECTIVE_KINDS,
    DirectiveBootstrap,
    DirectiveExtract,
    DirectiveGuard,
    DirectiveTerminalEvacuateState,
)
from hivemind.tasks.directives.terminal import TERMINAL_STATE_KEY
from hivemind.tasks.priorities import OverlordPriority
from hivemind.world.positions import RoomPosition


def _make_ctx(*rooms):
    world = build_world(rooms or [build_owned_room("E1S1")])
    ctx = TickContext(world=world)
    Overseer(ctx)
    for i, room in enumerate(world.owned_rooms()):
        Colony(ctx, i, room.name)
    return ctx


def _instantiate(ctx, directive_cls, pos, memory=None):
    name = directive_cls.create(ctx, pos, memory)
    return directive_cls.from_marker(ctx, ctx.world.markers[name])


def test_directive_name_encodes_kind_and_position():
    pos = RoomPosition(12, 38, "E1S1")

    assert directive_name("extract", pos) == "extract@E1S1:12:38"


def test_every_kind_is_registered():
    assert set(DIRECTIVE_KINDS) == {
        "bootstrap",
        "colonize",
        "evacuateState",
        "extract",
        "guard",
        "invasionDefense",
        "nukeResponse",
        "outpost",
        "outpostDefense",
    }


def test_create_if_not_present_respects_scope():
    ctx = _make_ctx()
    first = RoomPosition(10, 10, "E1S1")
    second = RoomPosition(20, 20, "E1S1")

    assert DirectiveGuard.create_if_not_present(ctx, first, SCOPE_POS) == "guard@E1S1:10:10"
    assert DirectiveGuard.create_if_not_present(ctx, first, SCOPE_POS) is None
    assert DirectiveGuard.create_if_not_present(ctx, second, SCOPE_ROOM) is None
    assert DirectiveGuard.create_if_not_present(ctx, second, SCOPE_POS) == "guard@E1S1:20:20"


def test_unknown_scope_is_rejected():
    ctx = _make_ctx()

    with pytest.raises(ValueError):
        DirectiveGuard.is_present(ctx, RoomPosition(10, 10, "E1S1"), "sector")


def test_directive_registers_with_overseer_and_context():
    ctx = _make_ctx()

    directive = _instantiate(ctx, DirectiveExtract, RoomPosition(12, 38, "E1S1"))

    assert ctx.overseer.directives == [directive]
    assert ctx.directives[directive.name] is directive
    assert directive.colony is ctx.colonies["E1S1"]
    assert directive.overlords["extract"].ref == "extract@E1S1:12:38>extract"
    assert directive.created == 0


def test_extract_priority_depends_on_level():
    ctx = _make_ctx(build_owned_room("E1S1", level=8), build_owned_room("E3S1", level=7))

    rcl8 = _instantiate(ctx, DirectiveExtract, RoomPosition(12, 38, "E1S1"))
    rcl7 = _instantiate(ctx, DirectiveExtract, RoomPosition(12, 38, "E3S1"))

    assert rcl8.overlords["extract"].priority == OverlordPriority.owned_room.mineral_rcl8 == 503
    assert rcl7.overlords["extract"].priority == OverlordPriority.owned_room.mineral == 520


def test_extract_removes_itself_below_required_level(caplog):
    ctx = _make_ctx(build_owned_room("E1S1", level=5))
    directive = _instantiate(ctx, DirectiveExtract, RoomPosition(12, 38, "E1S1"))
    overlord = directive.overlords["extract"]
    assert overlord in ctx.overseer.overlords

    with caplog.at_level(logging.INFO, logger="hivemind.tasks.directives.resource"):
        directive.run()

    assert "Removing extraction directive in E1S1: room level insufficient." in caplog.messages
    assert directive.name not in ctx.world.markers
    assert directive.name not in ctx.directives
    assert ctx.overseer.directives == []
    assert overlord not in ctx.overseer.overlords


def test_remove_is_idempotent():
    ctx = _make_ctx()
    directive = _instantiate(ctx, DirectiveGuard, RoomPosition(10, 10, "E1S1"))

    directive.remove()
    directive.remove()

    assert directive.removed
    assert ctx.overseer.directives == []


def test_marker_removed_externally_tears_down_directive():
    world = build_world([build_owned_room("E1S1", level=8)])
    world.create_marker(RoomPosition(12, 38, "E1S1"), "extract", "extract@E1S1:12:38")
    engine = SimulationEngine(world)

    engine.step()
    assert "extract@E1S1:12:38" in engine.ctx.directives
    assert engine.overseer.find_overlord("extract@E1S1:12:38>extract") is not None

    world.remove_marker("extract@E1S1:12:38")
    engine.step()

    assert "extract@E1S1:12:38" not in engine.ctx.directives
    assert engine.overseer.find_overlord("extract@E1S1:12:38>extract") is None


def test_marker_without_colony_is_dropped(caplog):
    ctx = _make_ctx()
    far = RoomPosition(25, 25, "E30S30")
    name = DirectiveGuard.create(ctx, far)

    with caplog.at_level(logging.WARNING, logger="hivemind.tasks.directive"):
        directive = DirectiveGuard.from_marker(ctx, ctx.world.markers[name])

    assert directive is None
    assert name not in ctx.world.markers
    assert f"No colony can service {name}; removing marker" in caplog.messages


def test_marker_memory_colony_wins():
    ctx = _make_ctx(build_owned_room("E1S1"), build_owned_room("E3S1"), build_remote_room("E2S1"))

    directive = _instantiate(ctx, DirectiveGuard, RoomPosition(10, 10, "E2S1"), {"colony": "E3S1"})

    assert directive.colony.name == "E3S1"


def test_nearest_colony_services_unowned_room():
    ctx = _make_ctx(build_owned_room("E1S1"), build_owned_room("E5S1"), build_remote_room("E2S1"))

    directive = _instantiate(ctx, DirectiveGuard, RoomPosition(10, 10, "E2S1"))

    assert directive.colony.name == "E1S1"


def test_bootstrap_removes_itself_once_queen_affordable():
    ctx = _make_ctx(build_owned_room("E1S1", energy=0))
    colony = ctx.colonies["E1S1"]
    directive = _instantiate(ctx, DirectiveBootstrap, colony.hatchery.pos)

    directive.init()
    assert colony.hatchery.settings.suppress_spawning is True
    directive.run()
    assert not directive.removed

    colony.room.energy_available = colony.room.energy_capacity_available
    directive.run()
    assert directive.removed


def test_evacuation_state_is_cleared_on_removal():
    room = build_owned_room("E1S1", terminal=True)
    ctx = _make_ctx(room)
    directive = _instantiate(ctx, DirectiveTerminalEvacuateState, room.terminal.pos)

    directive.init()
    assert ctx.memory["rooms"]["E1S1"][TERMINAL_STATE_KEY] == {"type": "evacuate", "since": 0}

    # No hostiles left in the room.
    directive.run()

    assert directive.removed
    assert TERMINAL_STATE_KEY not in ctx.memory["rooms"]["E1S1"]


def test_visuals_list_overlords():
    ctx = _make_ctx()
    directive = _instantiate(ctx, DirectiveGuard, RoomPosition(10, 10, "E1S1"))

    assert directive.visuals() == ["guard [E1S1 10,10]", "  guard: guard@E1S1:10:10>guard"]
