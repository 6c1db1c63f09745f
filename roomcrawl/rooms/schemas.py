"""Pydantic schemas for room files and graph snapshots.

These models mirror the frozen dataclasses in ``graph.py`` but validate data
arriving from outside the process (room files) and give tests a
serializable, order-insensitive view of a whole graph.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from .graph import RoomType, validate_room_name


class RoomRecord(BaseModel):
    """Parsed contents of a single room file."""

    name: str = Field(..., description="Room identity from the ROOM NAME line")
    connections: List[str] = Field(
        default_factory=list,
        description="Neighbor names in file order",
    )
    room_type: RoomType = Field(..., description="Role from the ROOM TYPE line")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_room_name(value)

    @field_validator("connections")
    @classmethod
    def _check_connections(cls, value: List[str]) -> List[str]:
        for name in value:
            validate_room_name(name)
        return value


class RoomState(BaseModel):
    """Identity and role of one room within a snapshot."""

    id: int
    name: str
    room_type: RoomType


class RoomGraphState(BaseModel):
    """Adjacency map between named rooms."""

    rooms: Dict[str, RoomState] = Field(
        default_factory=dict,
        description="Map of room name → room identity",
    )
    adjacency: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Map of room name → ordered neighbor names",
    )

    def room_types(self) -> Dict[str, RoomType]:
        return {name: state.room_type for name, state in self.rooms.items()}

    def edge_set(self) -> set[frozenset[str]]:
        """Return every undirected connection as a two-name frozenset."""

        edges: set[frozenset[str]] = set()
        for name, neighbors in self.adjacency.items():
            for neighbor in neighbors:
                edges.add(frozenset((name, neighbor)))
        return edges

    def same_layout(self, other: "RoomGraphState") -> bool:
        """Compare names, room types and adjacency sets, ignoring connection order."""

        if self.room_types() != other.room_types():
            return False
        if set(self.adjacency) != set(other.adjacency):
            return False
        return all(
            set(neighbors) == set(other.adjacency[name])
            for name, neighbors in self.adjacency.items()
        )
