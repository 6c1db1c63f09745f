"""Room graph data model.

A room graph is a fixed-size set of named rooms joined by undirected
connections. Rooms store their neighbors as names and the owning
``RoomGraph`` resolves those names, so loading rooms from files in any order
never leaves a dangling reference. Once constructed a graph is never mutated;
a play session only moves its own current-room pointer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .schemas import RoomGraphState


MAX_NAME_LENGTH = 9
"""Longest room name accepted by the model and the room file format."""


class RoomType(str, Enum):
    """Role of a room in the crawl; values double as the on-disk tokens."""

    START = "START_ROOM"
    MID = "MID_ROOM"
    END = "END_ROOM"


class RoomGraphError(ValueError):
    """Raised when rooms cannot be assembled into a consistent graph."""


def validate_room_name(name: str) -> str:
    """Return ``name`` if it is usable as a room identity, else raise ``ValueError``."""

    if not name:
        raise ValueError("room name must not be empty")
    if any(ch.isspace() for ch in name):
        raise ValueError(f"room name {name!r} must not contain whitespace")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(
            f"room name {name!r} is longer than {MAX_NAME_LENGTH} characters"
        )
    return name


@dataclass(frozen=True)
class Room:
    """A single location: identity, role and ordered neighbor names."""

    id: int
    name: str
    room_type: RoomType = RoomType.MID
    connections: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def degree(self) -> int:
        return len(self.connections)

    def is_connected_to(self, name: str) -> bool:
        return name in self.connections


class RoomGraph:
    """Owned, immutable collection of rooms indexable by id and name.

    The constructor enforces the structural invariants that hold for every
    graph regardless of where it came from:

    * room ids are ``0..N-1`` in order
    * names are unique and valid
    * exactly one START room and exactly one END room
    * every connection names a room in the graph
    * no self-connections and no duplicate connections

    Degree bounds and symmetry are properties of a well-formed layout rather
    than of the container; see ``roomcrawl.rooms.helpers.layout_issues``.
    """

    def __init__(self, rooms: Sequence[Room]):
        self._rooms: Tuple[Room, ...] = tuple(rooms)
        self._by_name: Dict[str, Room] = {}

        for index, room in enumerate(self._rooms):
            if room.id != index:
                raise RoomGraphError(
                    f"room {room.name!r} has id {room.id} but sits at position {index}"
                )
            try:
                validate_room_name(room.name)
            except ValueError as exc:
                raise RoomGraphError(str(exc)) from exc
            if room.name in self._by_name:
                raise RoomGraphError(f"duplicate room name {room.name!r}")
            self._by_name[room.name] = room

        for role in (RoomType.START, RoomType.END):
            count = sum(1 for room in self._rooms if room.room_type is role)
            if count != 1:
                raise RoomGraphError(
                    f"expected exactly one {role.value} room, found {count}"
                )

        for room in self._rooms:
            seen: set[str] = set()
            for neighbor in room.connections:
                if neighbor == room.name:
                    raise RoomGraphError(f"room {room.name!r} connects to itself")
                if neighbor in seen:
                    raise RoomGraphError(
                        f"room {room.name!r} lists connection {neighbor!r} more than once"
                    )
                if neighbor not in self._by_name:
                    raise RoomGraphError(
                        f"room {room.name!r} connects to unknown room {neighbor!r}"
                    )
                seen.add(neighbor)

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def __repr__(self) -> str:
        return f"RoomGraph({', '.join(self.names)})"

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    @property
    def names(self) -> List[str]:
        return [room.name for room in self._rooms]

    def room(self, room_id: int) -> Room:
        return self._rooms[room_id]

    def find_by_name(self, name: str) -> Optional[Room]:
        return self._by_name.get(name)

    def neighbors(self, room: Room) -> List[Room]:
        """Return ``room``'s neighbors in connection order."""

        return [self._by_name[name] for name in room.connections]

    def are_connected(self, first: str, second: str) -> bool:
        room = self._by_name.get(first)
        return room is not None and room.is_connected_to(second)

    @property
    def start_room(self) -> Room:
        return next(room for room in self._rooms if room.room_type is RoomType.START)

    @property
    def end_room(self) -> Room:
        return next(room for room in self._rooms if room.room_type is RoomType.END)

    def snapshot(self) -> RoomGraphState:
        """Return a serializable snapshot of this graph."""

        from .schemas import RoomGraphState, RoomState

        return RoomGraphState(
            rooms={
                room.name: RoomState(id=room.id, name=room.name, room_type=room.room_type)
                for room in self._rooms
            },
            adjacency={room.name: list(room.connections) for room in self._rooms},
        )
