"""
Randomized construction of degree-bounded, connected room graphs.

The builder picks N names from a larger pool, assigns roles by position
(first = START, last = END, the rest MID) and then keeps adding random
two-way connections until every room has at least ``min_connections``.

Algorithm (one connection per iteration):
1. Pick a uniformly random room A that still has fewer than N-1 connections
   (reject and resample otherwise)
2. Pick a uniformly random room B that is not A, has fewer than N-1
   connections and is not already connected to A (reject and resample)
3. Append B to A's connections and A to B's connections

Symmetry holds by construction. Connectivity is not checked explicitly; for
single-digit N, a minimum of three connections per room reliably yields a
connected graph. A pick budget guards against looping forever on inputs that
cannot satisfy the minimum.

Usage:
    builder = GraphBuilder(rng=random.Random(42))
    graph = builder.build()
"""

from __future__ import annotations

import random
from typing import Dict, List, Sequence

from .logging_utils import LOG_TAG_DETERMINISTIC, LOG_TAG_SUCCESS, log_deterministic, log_success
from .rooms import MIN_CONNECTIONS, Room, RoomGraph, RoomType, validate_room_name


DEFAULT_ROOM_NAMES: tuple[str, ...] = (
    "Altuve",
    "Beltran",
    "Bregman",
    "Correa",
    "Gattis",
    "Gonzalez",
    "Gurriel",
    "Keuchel",
    "Springer",
    "Verlander",
)

DEFAULT_NUM_ROOMS = 7
DEFAULT_MAX_ATTEMPTS = 100_000


class GraphBuildError(RuntimeError):
    """Raised when a room graph cannot be built from the given inputs."""


def shuffle_names(names: Sequence[str], rng: random.Random | None = None) -> List[str]:
    """Return a shuffled copy of ``names`` using a forward Fisher–Yates pass.

    For each index ``i`` from 0 to n-2 the element is swapped with a uniformly
    chosen index ``j`` in ``[i, n-1]``. Passing a seeded ``random.Random``
    makes the permutation reproducible.
    """

    rng = rng or random.Random()
    shuffled = list(names)
    n = len(shuffled)
    for i in range(n - 1):
        j = rng.randint(i, n - 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def room_type_for_position(index: int, num_rooms: int) -> RoomType:
    if index == 0:
        return RoomType.START
    if index == num_rooms - 1:
        return RoomType.END
    return RoomType.MID


class GraphBuilder:
    """Builds random room graphs that satisfy the degree bounds.

    Args:
        num_rooms: Number of rooms N in the graph (at least ``min_connections + 1``)
        name_pool: Candidate names; N of them are sampled per build
        rng: Random source; inject a seeded ``random.Random`` for reproducible graphs
        min_connections: Minimum connections every room must reach
        max_attempts: Upper bound on random room picks for one build
    """

    def __init__(
        self,
        num_rooms: int = DEFAULT_NUM_ROOMS,
        *,
        name_pool: Sequence[str] = DEFAULT_ROOM_NAMES,
        rng: random.Random | None = None,
        min_connections: int = MIN_CONNECTIONS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if num_rooms < min_connections + 1:
            raise GraphBuildError(
                f"{num_rooms} rooms cannot give every room {min_connections} connections; "
                f"need at least {min_connections + 1}"
            )
        unique_names = list(dict.fromkeys(name_pool))
        if len(unique_names) < num_rooms:
            raise GraphBuildError(
                f"name pool has {len(unique_names)} unique names but {num_rooms} rooms were requested"
            )
        for name in unique_names:
            try:
                validate_room_name(name)
            except ValueError as exc:
                raise GraphBuildError(str(exc)) from exc

        self.num_rooms = num_rooms
        self.name_pool = unique_names
        self.rng = rng or random.Random()
        self.min_connections = min_connections
        self.max_attempts = max_attempts
        self.attempts = 0

    @property
    def max_connections(self) -> int:
        return self.num_rooms - 1

    def choose_names(self) -> List[str]:
        """Shuffle the pool and keep the first N names, in shuffled order."""

        return shuffle_names(self.name_pool, self.rng)[: self.num_rooms]

    def build(self) -> RoomGraph:
        """Build a new random graph. Each call draws fresh names and connections."""

        names = self.choose_names()
        adjacency: Dict[str, List[str]] = {name: [] for name in names}
        self.attempts = 0

        log_deterministic(
            f"  {LOG_TAG_DETERMINISTIC} [Builder] Connecting {self.num_rooms} rooms: {', '.join(names)}"
        )
        while not self._is_full(adjacency):
            self._add_random_connection(names, adjacency)

        rooms = [
            Room(
                id=index,
                name=name,
                room_type=room_type_for_position(index, self.num_rooms),
                connections=tuple(adjacency[name]),
            )
            for index, name in enumerate(names)
        ]
        log_success(
            f"  {LOG_TAG_SUCCESS} [Builder] Graph complete after {self.attempts} picks"
        )
        return RoomGraph(rooms)

    def _is_full(self, adjacency: Dict[str, List[str]]) -> bool:
        return all(len(links) >= self.min_connections for links in adjacency.values())

    def _can_add_connection_from(self, links: List[str]) -> bool:
        return len(links) < self.max_connections

    def _random_name(self, names: Sequence[str]) -> str:
        self.attempts += 1
        if self.attempts > self.max_attempts:
            raise GraphBuildError(
                f"gave up after {self.max_attempts} random picks without satisfying "
                f"{self.min_connections} connections per room"
            )
        return names[self.rng.randrange(len(names))]

    def _add_random_connection(self, names: Sequence[str], adjacency: Dict[str, List[str]]) -> None:
        while True:
            first = self._random_name(names)
            if self._can_add_connection_from(adjacency[first]):
                break

        while True:
            second = self._random_name(names)
            if second == first:
                continue
            if not self._can_add_connection_from(adjacency[second]):
                continue
            if second in adjacency[first]:
                continue
            break

        adjacency[first].append(second)
        adjacency[second].append(first)


def build_room_graph(
    num_rooms: int = DEFAULT_NUM_ROOMS,
    *,
    rng: random.Random | None = None,
    name_pool: Sequence[str] = DEFAULT_ROOM_NAMES,
) -> RoomGraph:
    """Convenience wrapper: build one graph with default settings."""

    return GraphBuilder(num_rooms, name_pool=name_pool, rng=rng).build()
