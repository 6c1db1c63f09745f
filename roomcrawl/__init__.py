"""
Roomcrawl - random room graphs and a text crawl through them.

A generator builds a random, connected graph of rooms and writes one text
file per room. A player loads the newest set of room files and walks from the
start room to the end room, asking a background timekeeper thread for the
current time on demand.
"""

__version__ = "0.1.0"

# Room graph model
from .rooms import (
    MAX_NAME_LENGTH,
    MIN_CONNECTIONS,
    Room,
    RoomGraph,
    RoomGraphError,
    RoomGraphState,
    RoomRecord,
    RoomState,
    RoomType,
    is_connected,
    layout_issues,
    validate_room_move,
)

# Generation
from .builder import (
    DEFAULT_NUM_ROOMS,
    DEFAULT_ROOM_NAMES,
    GraphBuildError,
    GraphBuilder,
    build_room_graph,
    shuffle_names,
)

# Room files
from .codec import (
    MalformedRoomFileError,
    RoomDataMissingError,
    RoomDirectoryError,
    create_rooms_directory,
    decode_room,
    encode_room,
    find_newest_rooms_directory,
    load_newest_graph,
    read_graph,
    save_graph,
    write_graph,
)

# Play
from .timekeeper import TIME_FORMAT, TimeKeeper, TimeReading, format_timestamp
from .game import GameAborted, GameSession, TurnOutcome, TurnResult, play

__all__ = [
    # Room graph model
    "MAX_NAME_LENGTH",
    "MIN_CONNECTIONS",
    "Room",
    "RoomGraph",
    "RoomGraphError",
    "RoomGraphState",
    "RoomRecord",
    "RoomState",
    "RoomType",
    "is_connected",
    "layout_issues",
    "validate_room_move",
    # Generation
    "DEFAULT_NUM_ROOMS",
    "DEFAULT_ROOM_NAMES",
    "GraphBuildError",
    "GraphBuilder",
    "build_room_graph",
    "shuffle_names",
    # Room files
    "MalformedRoomFileError",
    "RoomDataMissingError",
    "RoomDirectoryError",
    "create_rooms_directory",
    "decode_room",
    "encode_room",
    "find_newest_rooms_directory",
    "load_newest_graph",
    "read_graph",
    "save_graph",
    "write_graph",
    # Play
    "TIME_FORMAT",
    "TimeKeeper",
    "TimeReading",
    "format_timestamp",
    "GameAborted",
    "GameSession",
    "TurnOutcome",
    "TurnResult",
    "play",
]
