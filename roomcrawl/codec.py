"""
Plain-text room files: encoding, decoding and directory handling.

Each room is stored in its own file, named ``room<id>``, with lines written in
this fixed order:

```
ROOM NAME: <name>
CONNECTION 1: <neighbor-name>
...
CONNECTION k: <neighbor-name>
ROOM TYPE: <START_ROOM|MID_ROOM|END_ROOM>
```

The reader dispatches on line prefixes rather than line offsets, so any number
of connection lines in any position is accepted. Reading a directory happens in
two passes: every file is parsed into a ``RoomRecord`` first, and only then are
records assembled into a ``RoomGraph`` so neighbor names resolve regardless of
which file mentions them first.

A generator run writes into a fresh ``<prefix>.<pid>`` directory; a player run
picks the most recently modified directory whose name contains the prefix.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .builder import DEFAULT_NUM_ROOMS
from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
    log_deterministic,
    log_info,
    log_success,
)
from .rooms import MIN_CONNECTIONS, Room, RoomGraph, RoomGraphError, RoomRecord, layout_issues


NAME_PREFIX = "ROOM NAME"
CONNECTION_PREFIX = "CONNECTION"
TYPE_PREFIX = "ROOM TYPE"


# =============================
# Module-level Exceptions
# =============================

class RoomDirectoryError(OSError):
    """Raised when the directory for a new set of room files cannot be created."""


class RoomDataMissingError(FileNotFoundError):
    """Raised when no room directory exists or a room file is absent."""


class MalformedRoomFileError(ValueError):
    """Raised when a room file, or the graph it describes, is not well formed."""


# =============================
# Single-room encoding
# =============================

def room_file_name(room_id: int) -> str:
    return f"room{room_id}"


def encode_room(room: Room) -> str:
    """Render ``room`` in the canonical line order."""

    lines = [f"{NAME_PREFIX}: {room.name}"]
    for position, neighbor in enumerate(room.connections, start=1):
        lines.append(f"{CONNECTION_PREFIX} {position}: {neighbor}")
    lines.append(f"{TYPE_PREFIX}: {room.room_type.value}")
    return "\n".join(lines) + "\n"


def _field_value(line: str, source: str) -> str:
    _, sep, value = line.partition(":")
    if not sep:
        raise MalformedRoomFileError(f"{source}: line {line!r} has no ':' separator")
    return value.strip()


def decode_room(text: str, *, source: str = "<room file>") -> RoomRecord:
    """Parse the text of one room file.

    Args:
        text: File contents
        source: Label used in error messages (usually the file path)

    Raises:
        MalformedRoomFileError: missing or repeated name/type line, a line with an
            unknown prefix, a bad connection number, an invalid name or an
            unrecognized room type
    """

    name: Optional[str] = None
    room_type: Optional[str] = None
    connections: List[str] = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith(NAME_PREFIX):
            if name is not None:
                raise MalformedRoomFileError(f"{source}: more than one {NAME_PREFIX} line")
            name = _field_value(line, source)
        elif line.startswith(TYPE_PREFIX):
            if room_type is not None:
                raise MalformedRoomFileError(f"{source}: more than one {TYPE_PREFIX} line")
            room_type = _field_value(line, source)
        elif line.startswith(CONNECTION_PREFIX):
            label = line.partition(":")[0][len(CONNECTION_PREFIX):].strip()
            if not label.isdigit():
                raise MalformedRoomFileError(
                    f"{source}: connection line {line!r} is missing its number"
                )
            connections.append(_field_value(line, source))
        else:
            raise MalformedRoomFileError(f"{source}: unrecognized line {line!r}")

    if name is None:
        raise MalformedRoomFileError(f"{source}: missing {NAME_PREFIX} line")
    if room_type is None:
        raise MalformedRoomFileError(f"{source}: missing {TYPE_PREFIX} line")

    try:
        return RoomRecord(name=name, connections=connections, room_type=room_type)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', [])) or 'root'}: {err.get('msg')}"
            for err in exc.errors(include_url=False)
        )
        raise MalformedRoomFileError(f"{source}: {problems}") from exc


def graph_from_records(
    records: List[RoomRecord],
    *,
    min_connections: int = MIN_CONNECTIONS,
    check_layout: bool = True,
) -> RoomGraph:
    """Assemble parsed records, in id order, into a ``RoomGraph``.

    Raises:
        MalformedRoomFileError: records do not form a valid graph, or (with
            ``check_layout``) break the degree, symmetry or connectivity rules
    """

    rooms = [
        Room(
            id=index,
            name=record.name,
            room_type=record.room_type,
            connections=tuple(record.connections),
        )
        for index, record in enumerate(records)
    ]
    try:
        graph = RoomGraph(rooms)
    except RoomGraphError as exc:
        raise MalformedRoomFileError(f"room files do not form a graph: {exc}") from exc

    if check_layout:
        issues = layout_issues(graph, min_connections=min_connections)
        if issues:
            raise MalformedRoomFileError(
                "room files describe an invalid layout: " + "; ".join(issues)
            )
    return graph


# =============================
# Directory-level operations
# =============================

def write_graph(graph: RoomGraph, directory: Path) -> List[Path]:
    """Write one file per room into an existing ``directory``."""

    written: List[Path] = []
    for room in graph:
        path = Path(directory) / room_file_name(room.id)
        path.write_text(encode_room(room), encoding="utf-8")
        written.append(path)
    log_deterministic(
        f"  {LOG_TAG_DETERMINISTIC} [Codec] Wrote {len(written)} room files to {directory}"
    )
    return written


def read_graph(
    directory: Path,
    num_rooms: int = DEFAULT_NUM_ROOMS,
    *,
    min_connections: int = MIN_CONNECTIONS,
    check_layout: bool = True,
) -> RoomGraph:
    """Load ``room0`` … ``room{num_rooms-1}`` from ``directory``.

    Raises:
        RoomDataMissingError: a room file does not exist or cannot be read
        MalformedRoomFileError: a file or the resulting graph is invalid
    """

    directory = Path(directory)
    records: List[RoomRecord] = []
    for room_id in range(num_rooms):
        path = directory / room_file_name(room_id)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise RoomDataMissingError(f"Room data missing: {path}") from exc
        except UnicodeDecodeError as exc:
            raise MalformedRoomFileError(f"{path}: not valid UTF-8") from exc
        except OSError as exc:
            raise RoomDataMissingError(f"Room data missing: {path} ({exc})") from exc
        records.append(decode_room(text, source=str(path)))

    graph = graph_from_records(records, min_connections=min_connections, check_layout=check_layout)
    log_success(f"  {LOG_TAG_SUCCESS} [Codec] Loaded {len(graph)} rooms from {directory}")
    return graph


def create_rooms_directory(root: Path, prefix: str, suffix: object = None) -> Path:
    """Create ``<root>/<prefix>.<suffix>``; ``suffix`` defaults to the process id.

    Raises:
        RoomDirectoryError: the directory already exists or cannot be created
    """

    suffix = os.getpid() if suffix is None else suffix
    path = Path(root) / f"{prefix}.{suffix}"
    try:
        path.mkdir(mode=0o755)
    except OSError as exc:
        raise RoomDirectoryError(f"could not create {path}: {exc}") from exc
    return path


def find_newest_rooms_directory(root: Path, prefix: str) -> Optional[Path]:
    """Return the most recently modified directory under ``root`` containing ``prefix``.

    Directories with equal modification times are ordered by name and the
    lexicographically last one wins, so the choice never depends on scan order.
    Returns None when nothing matches.
    """

    best: Optional[tuple[int, str]] = None
    best_path: Optional[Path] = None
    try:
        with os.scandir(root) as it:
            for entry in it:
                if prefix not in entry.name:
                    continue
                try:
                    if not entry.is_dir(follow_symlinks=False):
                        continue
                    mtime_ns = entry.stat(follow_symlinks=False).st_mtime_ns
                except FileNotFoundError:
                    # Removed between the scan and the stat
                    continue
                key = (mtime_ns, entry.name)
                if best is None or key > best:
                    best = key
                    best_path = Path(entry.path)
    except FileNotFoundError:
        return None

    if best_path is not None:
        log_info(f"  {LOG_TAG_INFO} [Codec] Newest room directory: {best_path.name}")
    return best_path


def save_graph(graph: RoomGraph, root: Path, prefix: str, suffix: object = None) -> Path:
    """Create a fresh room directory under ``root`` and write ``graph`` into it."""

    directory = create_rooms_directory(root, prefix, suffix)
    write_graph(graph, directory)
    return directory


def load_newest_graph(
    root: Path,
    prefix: str,
    num_rooms: int = DEFAULT_NUM_ROOMS,
    *,
    min_connections: int = MIN_CONNECTIONS,
) -> RoomGraph:
    """Load the graph stored in the newest room directory under ``root``.

    Raises:
        RoomDataMissingError: no directory under ``root`` matches ``prefix``
    """

    directory = find_newest_rooms_directory(root, prefix)
    if directory is None:
        raise RoomDataMissingError(
            f"Room data missing: no directory containing {prefix!r} under {root}"
        )
    return read_graph(directory, num_rooms, min_connections=min_connections)
