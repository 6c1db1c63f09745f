"""Utilities for checking room graph layouts and validating moves."""

from __future__ import annotations

from collections import deque
from typing import List, Set

from .graph import RoomGraph


MIN_CONNECTIONS = 3
"""Fewest connections a room may have in a well-formed layout."""


def max_connections(graph: RoomGraph) -> int:
    """Most connections a room can have: one to every other room."""

    return len(graph) - 1


def reachable_names(graph: RoomGraph, start: str) -> Set[str]:
    """Return every room name reachable from ``start`` (inclusive) using BFS."""

    if graph.find_by_name(start) is None:
        return set()
    # Start node is already visited; the queue holds names still to expand.
    visited = {start}
    queue: deque[str] = deque([start])

    while queue:
        room = graph.find_by_name(queue.popleft())
        for neighbor in room.connections:
            if neighbor in visited:
                continue
            # Mark before enqueueing so a room is never queued twice
            visited.add(neighbor)
            queue.append(neighbor)
    return visited


def is_connected(graph: RoomGraph) -> bool:
    """Return True when a path exists between every pair of rooms."""

    if len(graph) == 0:
        return True
    return reachable_names(graph, graph.room(0).name) == set(graph.names)


def asymmetric_connections(graph: RoomGraph) -> List[tuple[str, str]]:
    """Return ``(a, b)`` pairs where ``a`` lists ``b`` but ``b`` does not list ``a``."""

    missing: List[tuple[str, str]] = []
    for room in graph:
        for neighbor in room.connections:
            if not graph.are_connected(neighbor, room.name):
                missing.append((room.name, neighbor))
    return missing


def degree_violations(graph: RoomGraph, *, min_connections: int = MIN_CONNECTIONS) -> List[str]:
    """Return names of rooms whose connection count is outside ``[min, N-1]``."""

    upper = max_connections(graph)
    return [
        room.name
        for room in graph
        if not (min_connections <= room.degree <= upper)
    ]


def layout_issues(graph: RoomGraph, *, min_connections: int = MIN_CONNECTIONS) -> List[str]:
    """Describe every way ``graph`` breaks the well-formed layout rules.

    Checks three properties beyond the structural ones ``RoomGraph`` enforces:
    1. Every room has between ``min_connections`` and N-1 connections
    2. Connections are symmetric
    3. The graph is connected

    Returns:
        Human-readable problem descriptions; empty when the layout is valid
    """

    issues: List[str] = []
    upper = max_connections(graph)
    for name in degree_violations(graph, min_connections=min_connections):
        degree = graph.find_by_name(name).degree
        issues.append(
            f"room {name!r} has {degree} connections (expected {min_connections}-{upper})"
        )
    for name, neighbor in asymmetric_connections(graph):
        issues.append(f"room {name!r} connects to {neighbor!r} but not the reverse")
    if not is_connected(graph):
        issues.append("rooms are not all reachable from one another")
    return issues


def validate_room_move(graph: RoomGraph, current: str, target: str) -> bool:
    """Return True when ``target`` is a room directly connected to ``current``.

    Unknown targets and known-but-unconnected targets are both rejected; a
    player may only step along a single connection.
    """

    if graph.find_by_name(target) is None:
        return False
    return graph.are_connected(current, target)
