"""Interactive crawl through a loaded room graph.

``GameSession`` holds the only mutable play state: the current room and the
ordered path of rooms entered. The graph itself is never modified. ``play``
drives the prompt loop with injectable input/output callables so the whole
transcript can be exercised in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .logging_utils import LOG_TAG_DETERMINISTIC, LOG_TAG_SUCCESS, log_deterministic, log_success
from .rooms import Room, RoomGraph, RoomType, validate_room_move
from .timekeeper import TimeKeeper


TIME_COMMAND = "time"
UNKNOWN_ROOM_MESSAGE = "HUH? I DON'T UNDERSTAND THAT ROOM. TRY AGAIN."
VICTORY_MESSAGE = "YOU HAVE FOUND THE END ROOM. CONGRATULATIONS!"


class GameAborted(Exception):
    """Raised when input ends before the END room is reached."""


class TurnOutcome(str, Enum):
    MOVED = "moved"
    TIME = "time"
    REJECTED = "rejected"


@dataclass(frozen=True)
class TurnResult:
    """What happened in response to one line of player input."""

    outcome: TurnOutcome
    message: Optional[str] = None
    room: Optional[str] = None


class GameSession:
    """Navigation state for one play-through.

    The player starts in the START room. Entering the name of a connected
    room moves there and records it in ``path``; ``time`` asks the
    timekeeper for a fresh timestamp; anything else is rejected.
    """

    def __init__(self, graph: RoomGraph, timekeeper: Optional[TimeKeeper] = None):
        self.graph = graph
        self.timekeeper = timekeeper or TimeKeeper()
        self._location: Room = graph.start_room
        self.path: List[str] = []

    @property
    def location(self) -> Room:
        return self._location

    @property
    def steps(self) -> int:
        return len(self.path)

    @property
    def finished(self) -> bool:
        return self._location.room_type is RoomType.END

    def prompt(self) -> str:
        neighbors = ", ".join(room.name for room in self.graph.neighbors(self._location))
        return (
            f"CURRENT LOCATION: {self._location.name}\n"
            f"POSSIBLE CONNECTIONS: {neighbors}.\n"
            "WHERE TO? >"
        )

    def handle(self, entry: str) -> TurnResult:
        """Apply one line of input and report the outcome."""

        entry = entry.rstrip("\r\n")

        if validate_room_move(self.graph, self._location.name, entry):
            self._location = self.graph.find_by_name(entry)
            self.path.append(entry)
            log_deterministic(
                f"  {LOG_TAG_DETERMINISTIC} [Game] Step {self.steps}: moved to {entry}"
            )
            return TurnResult(TurnOutcome.MOVED, room=entry)

        if entry == TIME_COMMAND:
            text = self.timekeeper.start().request_time()
            return TurnResult(TurnOutcome.TIME, message=text)

        return TurnResult(TurnOutcome.REJECTED, message=UNKNOWN_ROOM_MESSAGE)

    def victory_summary(self) -> str:
        lines = [
            VICTORY_MESSAGE,
            f"YOU TOOK {self.steps} STEPS. YOUR PATH TO VICTORY WAS:",
            *self.path,
        ]
        return "\n".join(lines)


def play(
    session: GameSession,
    *,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> List[str]:
    """Run the prompt loop until the END room is reached.

    Returns:
        The path of room names entered, START excluded

    Raises:
        GameAborted: ``input_fn`` hit end of input first
    """

    session.timekeeper.start()

    while not session.finished:
        try:
            entry = input_fn("\n" + session.prompt())
        except EOFError as exc:
            raise GameAborted(
                f"input ended in {session.location.name} after {session.steps} steps"
            ) from exc

        result = session.handle(entry)
        if result.message is not None:
            output_fn("\n" + result.message)

    log_success(f"  {LOG_TAG_SUCCESS} [Game] Reached {session.location.name}")
    output_fn("\n" + session.victory_summary())
    return list(session.path)
