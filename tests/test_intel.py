from hivemind.intel import get_safety_data, get_sources, refresh_intel, room_owned_by, room_reserved_by
from hivemind.scenarios import build_owned_room, build_remote_room, build_world, place_hostiles
from hivemind.world.positions import RoomPosition


def test_rooms_are_recorded_from_our_point_of_view():
    world = build_world(
        [
            build_owned_room("E1S1"),
            build_remote_room("E2S1", owner="Rival"),
            build_remote_room("E1S2", reservation="Overseer"),
        ]
    )

    refresh_intel(world)

    assert room_owned_by(world, "E1S1") is None
    assert room_owned_by(world, "E2S1") == "Rival"
    assert room_reserved_by(world, "E1S2") is None
    assert get_sources(world, "E1S1") == [RoomPosition(10, 10, "E1S1"), RoomPosition(40, 40, "E1S1")]
    assert get_sources(world, "E9S9") is None


def test_safety_streaks_count_once_per_tick():
    room = build_owned_room("E1S1")
    world = build_world([room])

    refresh_intel(world)
    refresh_intel(world)
    assert get_safety_data(world, "E1S1").safe_for == 1

    place_hostiles(room, 1)
    for _ in range(3):
        world.advance_tick()
        refresh_intel(world)

    data = get_safety_data(world, "E1S1")
    assert (data.safe_for, data.unsafe_for, data.tick) == (0, 3, 3)


def test_harmless_hostiles_do_not_break_safety():
    room = build_owned_room("E1S1")
    place_hostiles(room, 2, body=("move", "carry"))
    world = build_world([room])

    refresh_intel(world)

    assert get_safety_data(world, "E1S1").unsafe_for == 0
