"""Command-line entry points.

``roomcrawl-build`` generates a fresh room directory:

    roomcrawl-build                 # 7 rooms under the current directory
    roomcrawl-build --seed 42       # reproducible layout

``roomcrawl-play`` loads the newest room directory and starts the crawl:

    roomcrawl-play

Defaults come from ``Config`` (``ROOMCRAWL_*`` environment variables or a
``.env`` file), so both commands work with no arguments.
"""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import Sequence

from .builder import GraphBuilder, GraphBuildError
from .codec import MalformedRoomFileError, RoomDataMissingError, RoomDirectoryError, load_newest_graph, save_graph
from .config import Config
from .game import GameAborted, GameSession, play
from .logging_utils import LOG_TAG_ERROR, LOG_TAG_SUCCESS, log_error, log_info, log_success
from .timekeeper import TimeKeeper


DIRECTORY_FAILURE_MESSAGE = "Failed to create directory for room files."


def parse_build_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a random set of connected room files")
    parser.add_argument("--root", type=Path, default=Config.ROOT_DIR, help="Directory to create the room directory in")
    parser.add_argument("--seed", type=int, default=Config.SEED, help="Seed for a reproducible layout")
    parser.add_argument("--rooms", type=int, default=Config.NUM_ROOMS, help="Number of rooms to generate")
    return parser.parse_args(argv)


def parse_play_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crawl from the start room to the end room")
    parser.add_argument("--root", type=Path, default=Config.ROOT_DIR, help="Directory holding room directories")
    parser.add_argument("--rooms", type=int, default=Config.NUM_ROOMS, help="Number of room files to load")
    return parser.parse_args(argv)


def build_main(argv: Sequence[str] | None = None) -> int:
    args = parse_build_args(argv)
    try:
        Config.validate()
        Config.check_room_count(args.rooms, "--rooms")
    except ValueError as exc:
        log_error(f"{LOG_TAG_ERROR} {exc}")
        return 1
    log_info(Config.display())

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        graph = GraphBuilder(
            args.rooms,
            rng=rng,
            max_attempts=Config.MAX_BUILD_ATTEMPTS,
        ).build()
    except GraphBuildError as exc:
        log_error(f"{LOG_TAG_ERROR} {exc}")
        return 1

    try:
        directory = save_graph(graph, args.root, Config.DIR_PREFIX)
    except RoomDirectoryError as exc:
        print(DIRECTORY_FAILURE_MESSAGE)
        log_info(str(exc))
        return 1

    log_success(f"{LOG_TAG_SUCCESS} Wrote {len(graph)} rooms to {directory}")
    return 0


def play_main(argv: Sequence[str] | None = None) -> int:
    args = parse_play_args(argv)

    try:
        graph = load_newest_graph(args.root, Config.DIR_PREFIX, args.rooms)
    except (RoomDataMissingError, MalformedRoomFileError) as exc:
        log_error(str(exc))
        return 1

    session = GameSession(graph, TimeKeeper())
    try:
        play(session)
    except (GameAborted, KeyboardInterrupt) as exc:
        log_error(f"\n{LOG_TAG_ERROR} Game ended early: {exc}")
        return 1
    return 0

