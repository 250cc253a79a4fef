"""World model: room names, positions, room objects and path estimates."""

from .cartographer import RoomType, find_rooms_in_range, linear_distance, room_type
from .objects import (
    Controller,
    Creep,
    Drop,
    Hostile,
    Marker,
    Nuke,
    ReturnCode,
    Source,
    Structure,
    StructureKind,
    Tombstone,
)
from .positions import RoomPosition
from .room import Room

__all__ = [
    "Controller",
    "Creep",
    "Drop",
    "Hostile",
    "Marker",
    "Nuke",
    "ReturnCode",
    "Room",
    "RoomPosition",
    "RoomType",
    "Source",
    "Structure",
    "StructureKind",
    "Tombstone",
    "find_rooms_in_range",
    "linear_distance",
    "room_type",
]
