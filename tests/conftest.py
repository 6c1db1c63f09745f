"""Shared fixtures for roomcrawl tests."""

import pytest

from roomcrawl.rooms import Room, RoomGraph, RoomType


CRAWL_LAYOUT = [
    ("Altuve", RoomType.START, ("Beltran", "Correa", "Gattis")),
    ("Beltran", RoomType.MID, ("Altuve", "Correa", "Keuchel")),
    ("Correa", RoomType.MID, ("Altuve", "Beltran", "Gattis", "Keuchel")),
    ("Gattis", RoomType.MID, ("Altuve", "Correa", "Keuchel")),
    ("Keuchel", RoomType.END, ("Beltran", "Gattis", "Correa")),
]


def make_rooms(layout=CRAWL_LAYOUT) -> list[Room]:
    return [
        Room(id=index, name=name, room_type=room_type, connections=tuple(links))
        for index, (name, room_type, links) in enumerate(layout)
    ]


@pytest.fixture
def crawl_graph() -> RoomGraph:
    """Five rooms, symmetric, 3-4 connections each; START is not next to END."""

    return RoomGraph(make_rooms())


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # Keep diagnostic traces out of captured transcripts
    monkeypatch.delenv("ROOMCRAWL_VERBOSE", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("ROOMCRAWL_NO_COLOR", "1")
