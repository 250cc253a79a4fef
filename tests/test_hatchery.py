from hivemind.colony import Colony
from hivemind.creeps.roles import Roles, Setups
from hivemind.creeps.setup import CREEP_SPAWN_TIME
from hivemind.hive.requests import SpawnRequest
from hivemind.scenarios import build_owned_room, build_world
from hivemind.simulation.context import TickContext
from hivemind.simulation.overseer import Overseer
from hivemind.tasks.priorities import OverlordPriority
from hivemind.world.objects import ReturnCode


def _make_colony(**room_kwargs) -> Colony:
    world = build_world([build_owned_room("E1S1", **room_kwargs)])
    ctx = TickContext(world=world)
    Overseer(ctx)
    return Colony(ctx, 0, "E1S1")


def _request(setup, priority, **options):
    return SpawnRequest(setup=setup, overlord=f"test>{setup.role}", priority=priority, options=options)


def test_colony_with_spawn_builds_hatchery_and_queen_overlord():
    colony = _make_colony()

    hatchery = colony.hatchery
    assert hatchery is not None
    assert hatchery.pos == colony.spawns[0].pos
    assert hatchery.overlord.ref == "E1S1:hatchery>queen"
    assert hatchery.overlord.priority == OverlordPriority.core.queen
    assert colony.ctx.overseer.overlords == [hatchery.overlord]
    assert colony.spawn_group is None


def test_highest_priority_request_spawns_first():
    colony = _make_colony()
    hatchery = colony.hatchery
    hatchery.enqueue(_request(Setups.miner, 500))
    hatchery.enqueue(_request(Setups.queen, 100))

    hatchery.run()

    creeps = list(colony.ctx.world.creeps.values())
    assert [creep.role for creep in creeps] == [Roles.QUEEN]
    assert creeps[0].overlord == "test>queen"
    assert creeps[0].colony == "E1S1"


def test_spawning_costs_energy_and_blocks_the_spawn():
    colony = _make_colony()
    hatchery = colony.hatchery
    room = colony.room
    before = room.energy_available
    hatchery.enqueue(_request(Setups.queen, 100))

    hatchery.run()

    body = Setups.queen.generate_body(room.energy_capacity_available)
    assert room.energy_available == before - 1200
    assert hatchery.next_availability == len(body) * CREEP_SPAWN_TIME

    hatchery.refresh()
    hatchery.enqueue(_request(Setups.miner, 100))
    hatchery.run()
    assert len(colony.ctx.world.creeps) == 1


def test_queued_requests_raise_next_availability():
    colony = _make_colony(spawns=2)
    hatchery = colony.hatchery
    assert hatchery.next_availability == 0

    hatchery.enqueue(_request(Setups.miner, 100))

    body = Setups.miner.generate_body(colony.room.energy_capacity_available)
    assert hatchery.next_availability == len(body) * CREEP_SPAWN_TIME / 2


def test_two_spawns_serve_two_requests():
    colony = _make_colony(spawns=2)
    hatchery = colony.hatchery
    hatchery.enqueue(_request(Setups.queen, 100))
    hatchery.enqueue(_request(Setups.miner, 200))
    hatchery.enqueue(_request(Setups.guard, 300))

    hatchery.run()

    assert sorted(creep.role for creep in colony.ctx.world.creeps.values()) == [Roles.DRONE, Roles.QUEEN]


def test_suppressed_hatchery_only_spawns_emergency_requests():
    colony = _make_colony()
    hatchery = colony.hatchery
    hatchery.settings.suppress_spawning = True
    hatchery.enqueue(_request(Setups.queen, OverlordPriority.core.queen))

    hatchery.run()
    assert colony.ctx.world.creeps == {}

    hatchery.enqueue(_request(Setups.filler, OverlordPriority.emergency.bootstrap))
    hatchery.run()
    assert [c.role for c in colony.ctx.world.creeps.values()] == [Roles.FILLER]


def test_refresh_lifts_suppression_and_clears_queue():
    colony = _make_colony()
    hatchery = colony.hatchery
    hatchery.settings.suppress_spawning = True
    hatchery.enqueue(_request(Setups.queen, 100))

    hatchery.refresh()

    assert hatchery.queue == []
    assert hatchery.settings.suppress_spawning is False


def test_flexible_request_spawns_smaller_body():
    colony = _make_colony(energy=300)
    hatchery = colony.hatchery

    result = hatchery.spawn_creep(colony.spawns[0], _request(Setups.queen, 100, flexible_energy=True))

    assert result == ReturnCode.OK
    (queen,) = colony.ctx.world.creeps.values()
    assert queen.body == ("carry", "carry", "carry", "carry", "move", "move")
    assert colony.room.energy_available == 0


def test_rigid_request_waits_for_full_energy():
    colony = _make_colony(energy=300)
    hatchery = colony.hatchery

    result = hatchery.spawn_creep(colony.spawns[0], _request(Setups.queen, 100))

    assert result == ReturnCode.ERR_NOT_ENOUGH_RESOURCES
    assert colony.ctx.world.creeps == {}


def test_blocked_request_holds_back_lower_priorities():
    colony = _make_colony(energy=300)
    hatchery = colony.hatchery
    hatchery.enqueue(_request(Setups.queen, 100))
    hatchery.enqueue(_request(Setups.filler, 200))

    hatchery.run()

    assert colony.ctx.world.creeps == {}


def test_busy_state_is_persisted_in_room_memory():
    colony = _make_colony()
    hatchery = colony.hatchery
    hatchery.enqueue(_request(Setups.queen, 100))
    hatchery.run()

    busy = colony.ctx.memory["rooms"]["E1S1"]["hatchery"]["busy_until"]
    assert busy == {"E1S1-spawn0": 72}

    colony.ctx.world.tick = 72
    hatchery.init()
    assert busy == {}
