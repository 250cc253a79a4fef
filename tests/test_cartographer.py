import pytest

from hivemind.world.cartographer import (
    RoomType,
    find_rooms_in_range,
    linear_distance,
    neighbors,
    room_coordinates,
    room_name_from_coordinates,
    room_type,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("E1S1", (1, 1)),
        ("E0S0", (0, 0)),
        ("W0N0", (-1, -1)),
        ("W3S7", (-4, 7)),
    ],
)
def test_room_coordinates(name, expected):
    assert room_coordinates(name) == expected
    assert room_name_from_coordinates(*expected) == name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("E10S20", RoomType.CROSSROAD),
        ("E10S3", RoomType.HIGHWAY),
        ("E5S5", RoomType.CORE),
        ("E4S6", RoomType.SOURCE_KEEPER),
        ("E2S1", RoomType.CONTROLLER),
    ],
)
def test_room_type(name, expected):
    assert room_type(name) == expected


def test_invalid_room_name():
    with pytest.raises(ValueError):
        room_type("sim")


def test_linear_distance_crosses_the_origin():
    assert linear_distance("W0S0", "E0S0") == 1
    assert linear_distance("E1S1", "E3S2") == 2


def test_neighbors():
    assert neighbors("E0S0") == {"top": "E0N0", "right": "E1S0", "bottom": "E0S1", "left": "W0S0"}


def test_rooms_in_range_nearest_first():
    rooms = find_rooms_in_range("E1S1", 2)

    assert len(rooms) == 24
    assert "E1S1" not in rooms
    assert set(rooms[:8]) == {"E0S0", "E1S0", "E2S0", "E0S1", "E2S1", "E0S2", "E1S2", "E2S2"}
    assert rooms[:8] == sorted(rooms[:8])
