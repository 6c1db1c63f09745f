"""Tests for room file encoding, decoding and room directory handling."""

import contextlib
import os
import random

import pytest

from roomcrawl.builder import GraphBuilder
from roomcrawl.codec import (
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
from roomcrawl.rooms import RoomType


PREFIX = "roomcrawl.rooms"


def test_encode_room_uses_canonical_order(crawl_graph):
    text = encode_room(crawl_graph.find_by_name("Beltran"))
    assert text == (
        "ROOM NAME: Beltran\n"
        "CONNECTION 1: Altuve\n"
        "CONNECTION 2: Correa\n"
        "CONNECTION 3: Keuchel\n"
        "ROOM TYPE: MID_ROOM\n"
    )


def test_decode_room_dispatches_on_prefixes():
    text = (
        "CONNECTION 1: Correa\n"
        "ROOM TYPE: START_ROOM\n"
        "\n"
        "ROOM NAME: Altuve\n"
        "CONNECTION 2: Gattis\n"
        "CONNECTION 3: Beltran\n"
    )
    record = decode_room(text)
    assert record.name == "Altuve"
    assert record.room_type is RoomType.START
    assert record.connections == ["Correa", "Gattis", "Beltran"]


def test_decode_room_rejects_unknown_room_type():
    text = "ROOM NAME: Altuve\nCONNECTION 1: Correa\nROOM TYPE: BOSS_ROOM\n"
    with pytest.raises(MalformedRoomFileError, match="room_type"):
        decode_room(text, source="room0")


@pytest.mark.parametrize(
    "text, message",
    [
        ("CONNECTION 1: Correa\nROOM TYPE: MID_ROOM\n", "missing ROOM NAME"),
        ("ROOM NAME: Altuve\nCONNECTION 1: Correa\n", "missing ROOM TYPE"),
        ("ROOM NAME: Altuve\nROOM NAME: Correa\nROOM TYPE: MID_ROOM\n", "more than one"),
        ("ROOM NAME: Altuve\nCONNECTION: Correa\nROOM TYPE: MID_ROOM\n", "missing its number"),
        ("ROOM NAME: Altuve\nDOOR 1: Correa\nROOM TYPE: MID_ROOM\n", "unrecognized line"),
        ("ROOM NAME: Altuve Two\nROOM TYPE: MID_ROOM\n", "whitespace"),
    ],
)
def test_decode_room_reports_malformed_files(text, message):
    with pytest.raises(MalformedRoomFileError, match=message):
        decode_room(text)


def test_write_then_read_directory(tmp_path, crawl_graph):
    written = write_graph(crawl_graph, tmp_path)
    assert [path.name for path in written] == ["room0", "room1", "room2", "room3", "room4"]

    loaded = read_graph(tmp_path, num_rooms=5)
    assert loaded.snapshot() == crawl_graph.snapshot()


def test_read_graph_resolves_names_regardless_of_file_order(tmp_path, crawl_graph):
    # room0 references rooms whose files come later; assembly happens after parsing
    write_graph(crawl_graph, tmp_path)
    text = (tmp_path / "room0").read_text()
    assert "Gattis" in text
    assert read_graph(tmp_path, num_rooms=5).find_by_name("Altuve").connections == (
        "Beltran",
        "Correa",
        "Gattis",
    )


def test_read_graph_missing_file(tmp_path, crawl_graph):
    write_graph(crawl_graph, tmp_path)
    (tmp_path / "room3").unlink()
    with pytest.raises(RoomDataMissingError, match="room3"):
        read_graph(tmp_path, num_rooms=5)


def test_read_graph_rejects_non_utf8_file(tmp_path, crawl_graph):
    write_graph(crawl_graph, tmp_path)
    (tmp_path / "room3").write_bytes(b"ROOM NAME: Caf\xe9\nROOM TYPE: MID_ROOM\n")
    with pytest.raises(MalformedRoomFileError, match="room3: not valid UTF-8"):
        read_graph(tmp_path, num_rooms=5)


def test_read_graph_rejects_asymmetric_layout(tmp_path, crawl_graph):
    write_graph(crawl_graph, tmp_path)
    # Drop Keuchel's link back to Correa
    (tmp_path / "room4").write_text(
        "ROOM NAME: Keuchel\nCONNECTION 1: Beltran\nCONNECTION 2: Gattis\nROOM TYPE: END_ROOM\n"
    )
    with pytest.raises(MalformedRoomFileError, match="not the reverse"):
        read_graph(tmp_path, num_rooms=5)

    # Structural loading still works when layout checks are turned off
    graph = read_graph(tmp_path, num_rooms=5, check_layout=False)
    assert graph.find_by_name("Keuchel").degree == 2


def test_read_graph_rejects_unknown_neighbor(tmp_path, crawl_graph):
    write_graph(crawl_graph, tmp_path)
    (tmp_path / "room1").write_text(
        "ROOM NAME: Beltran\nCONNECTION 1: Altuve\nCONNECTION 2: Springer\n"
        "CONNECTION 3: Keuchel\nROOM TYPE: MID_ROOM\n"
    )
    with pytest.raises(MalformedRoomFileError, match="unknown room 'Springer'"):
        read_graph(tmp_path, num_rooms=5)


def test_create_rooms_directory(tmp_path):
    path = create_rooms_directory(tmp_path, PREFIX, suffix=4242)
    assert path.name == f"{PREFIX}.4242"
    assert path.is_dir()

    # Creating the same directory twice fails
    with pytest.raises(RoomDirectoryError):
        create_rooms_directory(tmp_path, PREFIX, suffix=4242)

    default = create_rooms_directory(tmp_path, PREFIX)
    assert default.name == f"{PREFIX}.{os.getpid()}"


def test_find_newest_rooms_directory(tmp_path):
    older = tmp_path / f"{PREFIX}.100"
    newer = tmp_path / f"{PREFIX}.200"
    unrelated = tmp_path / "other.rooms"
    for path in (older, newer, unrelated):
        path.mkdir()
    stray_file = tmp_path / f"{PREFIX}.notes"
    stray_file.write_text("not a directory")

    os.utime(older, (1_000_000, 1_000_000))
    os.utime(newer, (2_000_000, 2_000_000))
    os.utime(unrelated, (3_000_000, 3_000_000))
    os.utime(stray_file, (4_000_000, 4_000_000))

    assert find_newest_rooms_directory(tmp_path, PREFIX) == newer


def test_find_newest_rooms_directory_breaks_ties_by_name(tmp_path):
    for suffix in ("300", "900", "500"):
        path = tmp_path / f"{PREFIX}.{suffix}"
        path.mkdir()
        os.utime(path, (1_500_000, 1_500_000))

    assert find_newest_rooms_directory(tmp_path, PREFIX).name == f"{PREFIX}.900"


def test_find_newest_rooms_directory_skips_directories_removed_mid_scan(tmp_path, monkeypatch):
    kept = tmp_path / f"{PREFIX}.100"
    removed = tmp_path / f"{PREFIX}.200"
    for path in (kept, removed):
        path.mkdir()
    os.utime(kept, (1_000_000, 1_000_000))
    os.utime(removed, (2_000_000, 2_000_000))
    real_scandir = os.scandir

    @contextlib.contextmanager
    def scandir_then_remove(path):
        with real_scandir(path) as it:
            entries = list(it)
        # Another process deletes a directory after it was listed
        removed.rmdir()
        yield iter(entries)

    monkeypatch.setattr(os, "scandir", scandir_then_remove)
    assert find_newest_rooms_directory(tmp_path, PREFIX) == kept


def test_find_newest_rooms_directory_none(tmp_path):
    assert find_newest_rooms_directory(tmp_path, PREFIX) is None
    assert find_newest_rooms_directory(tmp_path / "missing", PREFIX) is None
    with pytest.raises(RoomDataMissingError, match="Room data missing"):
        load_newest_graph(tmp_path, PREFIX)


def test_build_save_reload_end_to_end(tmp_path):
    original = GraphBuilder(rng=random.Random(2017)).build()

    directory = save_graph(original, tmp_path, PREFIX, suffix=1)
    # An older set of rooms must not be picked up instead
    stale = save_graph(GraphBuilder(rng=random.Random(1)).build(), tmp_path, PREFIX, suffix=0)
    os.utime(stale, (1_000_000, 1_000_000))
    os.utime(directory, (2_000_000, 2_000_000))

    reloaded = load_newest_graph(tmp_path, PREFIX, 7)

    assert reloaded.start_room.name == original.start_room.name
    assert reloaded.end_room.name == original.end_room.name
    assert reloaded.snapshot().same_layout(original.snapshot())
    for room in original:
        for neighbor in room.connections:
            assert reloaded.are_connected(room.name, neighbor)


def test_encode_decode_round_trip_keeps_records(crawl_graph):
    for room in crawl_graph:
        record = decode_room(encode_room(room))
        assert record.name == room.name
        assert record.room_type is room.room_type
        assert tuple(record.connections) == room.connections

