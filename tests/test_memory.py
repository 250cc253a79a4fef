import pytest

from hivemind.memory import dumps, loads, room_memory, signature, wrap


def test_wrap_fills_defaults_without_replacing():
    root = {"overseer": {"suspend_until": {"a": 3}}}

    node = wrap(root, "overseer", {"suspend_until": {}, "flags": []})

    assert node is root["overseer"]
    assert node == {"suspend_until": {"a": 3}, "flags": []}


def test_wrap_copies_mutable_defaults():
    defaults = {"busy_until": {}}
    first = wrap({}, "hatchery", defaults)
    first["busy_until"]["spawn"] = 1

    assert defaults == {"busy_until": {}}


def test_wrap_replaces_non_mapping_values():
    root = {"overseer": "corrupt"}

    assert wrap(root, "overseer", {}) == {}
    assert root["overseer"] == {}


def test_room_memory_is_created_on_demand():
    memory = {}

    room_memory(memory, "E1S1")["bunker"] = "25:25"

    assert memory == {"rooms": {"E1S1": {"bunker": "25:25"}}}


def test_signature_ignores_key_order():
    assert signature({"a": 1, "b": 2}) == signature({"b": 2, "a": 1})
    assert loads(dumps({"b": [1, 2], "a": None})) == {"a": None, "b": [1, 2]}


def test_loads_rejects_non_objects():
    with pytest.raises(ValueError):
        loads("[1, 2]")
