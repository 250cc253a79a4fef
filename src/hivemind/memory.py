"""Helpers for the persisted memory blob.

Memory is a plain JSON-compatible mapping that survives between ticks.
Components keep their persisted state in sub-mappings obtained through
:func:`wrap`, which fills in defaults without replacing what is already
there so that references handed out earlier in the tick stay valid.
"""

from __future__ import annotations

import copy
import json
from hashlib import sha256
from typing import Any, Mapping, MutableMapping


def wrap(root: MutableMapping[str, Any], key: str, defaults: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Return ``root[key]``, creating it and any missing default fields."""

    node = root.get(key)
    if not isinstance(node, MutableMapping):
        node = {}
        root[key] = node
    for field_name, value in defaults.items():
        if field_name not in node:
            node[field_name] = copy.deepcopy(value)
    return node


def room_memory(memory: MutableMapping[str, Any], room_name: str) -> MutableMapping[str, Any]:
    rooms = wrap(memory, "rooms", {})
    return wrap(rooms, room_name, {})


def dumps(memory: Mapping[str, Any]) -> str:
    return json.dumps(memory, sort_keys=True, separators=(",", ":"))


def loads(payload: str) -> MutableMapping[str, Any]:
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("memory payload must decode to an object")
    return data


def signature(memory: Mapping[str, Any]) -> str:
    return sha256(dumps(memory).encode("utf-8")).hexdigest()


__all__ = ["dumps", "loads", "room_memory", "signature", "wrap"]
