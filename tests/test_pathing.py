from hivemind.state import WorldState
from hivemind.world.pathing import (
    distance,
    find_path_to_room,
    find_pathable_position,
    find_route,
    is_reachable,
)
from hivemind.world.positions import RoomPosition


def _make_world(**kwargs) -> WorldState:
    return WorldState(**kwargs)


def test_route_to_same_room_is_empty():
    assert find_route(_make_world(), "E1S1", "E1S1") == {}


def test_route_lists_rooms_in_travel_order():
    route = find_route(_make_world(), "E1S1", "E3S1")

    assert list(route) == ["E2S1", "E3S1"]


def test_route_avoids_rooms_owned_by_others():
    world = _make_world(memory={"rooms": {"E2S1": {"own": "Rival"}}})

    route = find_route(world, "E1S1", "E3S1")

    assert route is not None
    assert "E2S1" not in route
    assert list(route)[-1] == "E3S1"


def test_closed_exits_block_the_route():
    world = _make_world()
    for other in ("E1S0", "E2S1", "E1S2", "E0S1"):
        world.closed_exits.add(frozenset(("E1S1", other)))

    assert find_route(world, "E1S1", "E3S1") is None
    assert distance(world, RoomPosition(25, 25, "E1S1"), RoomPosition(25, 25, "E3S1")) is None


def test_path_to_neighbouring_room_uses_target_range():
    result = find_path_to_room(_make_world(), RoomPosition(25, 25, "E1S1"), "E2S1")

    assert not result.incomplete
    assert result.length == 30
    assert result.rooms == ("E2S1",)


def test_path_to_unreachable_room_is_incomplete():
    world = _make_world()
    for other in ("E1S0", "E2S1", "E1S2", "E0S1"):
        world.closed_exits.add(frozenset(("E1S1", other)))

    assert find_path_to_room(world, RoomPosition(25, 25, "E1S1"), "E2S1").incomplete


def test_in_room_distance_goes_around_walls():
    wall = frozenset((10, y) for y in range(0, 49))
    world = _make_world(terrain={"E1S1": wall})

    straight = distance(_make_world(), RoomPosition(5, 5, "E1S1"), RoomPosition(15, 5, "E1S1"))
    detour = distance(world, RoomPosition(5, 5, "E1S1"), RoomPosition(15, 5, "E1S1"))

    assert straight == 9
    assert detour > straight


def test_barriers_make_a_target_unreachable():
    start = RoomPosition(5, 5, "E1S1")
    ring = [RoomPosition(5 + dx, 5 + dy, "E1S1") for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy]

    assert is_reachable(_make_world(), start, RoomPosition(30, 30, "E1S1"))
    assert not is_reachable(_make_world(), start, RoomPosition(30, 30, "E1S1"), ring)


def test_pathable_position_prefers_the_centre():
    world = _make_world(terrain={"E1S1": frozenset({(25, 25)})})

    assert find_pathable_position(_make_world(), "E1S1") == RoomPosition(25, 25, "E1S1")
    pos = find_pathable_position(world, "E1S1")
    assert pos != RoomPosition(25, 25, "E1S1")
    assert pos.get_range_to(RoomPosition(25, 25, "E1S1")) == 1
