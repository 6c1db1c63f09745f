"""Room graph model, snapshot schemas and layout helpers."""

from .graph import MAX_NAME_LENGTH, Room, RoomGraph, RoomGraphError, RoomType, validate_room_name
from .schemas import RoomGraphState, RoomRecord, RoomState
from .helpers import (
    MIN_CONNECTIONS,
    asymmetric_connections,
    degree_violations,
    is_connected,
    layout_issues,
    max_connections,
    reachable_names,
    validate_room_move,
)

__all__ = [
    "MAX_NAME_LENGTH",
    "MIN_CONNECTIONS",
    "Room",
    "RoomGraph",
    "RoomGraphError",
    "RoomType",
    "RoomGraphState",
    "RoomRecord",
    "RoomState",
    "validate_room_name",
    "asymmetric_connections",
    "degree_violations",
    "is_connected",
    "layout_issues",
    "max_connections",
    "reachable_names",
    "validate_room_move",
]
