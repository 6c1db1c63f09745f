"""
Roomcrawl Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .builder import DEFAULT_ROOM_NAMES
from .rooms import MIN_CONNECTIONS

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Graph Generation
    NUM_ROOMS: int = int(os.getenv("ROOMCRAWL_NUM_ROOMS", "7"))
    # Seed for the generator's random source; unset means system entropy
    SEED: int | None = _optional_int("ROOMCRAWL_SEED")
    MAX_BUILD_ATTEMPTS: int = int(os.getenv("ROOMCRAWL_MAX_BUILD_ATTEMPTS", "100000"))

    # Room File Storage
    DIR_PREFIX: str = os.getenv("ROOMCRAWL_DIR_PREFIX", "roomcrawl.rooms")
    ROOT_DIR: Path = Path(os.getenv("ROOMCRAWL_ROOT", "."))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def check_room_count(num_rooms: int, setting: str = "ROOMCRAWL_NUM_ROOMS") -> None:
        """Raise ValueError unless the default name pool can fill ``num_rooms`` rooms."""
        if num_rooms < MIN_CONNECTIONS + 1:
            raise ValueError(
                f"{setting} must be at least {MIN_CONNECTIONS + 1} "
                f"so every room can reach {MIN_CONNECTIONS} connections (got {num_rooms})"
            )

        if num_rooms > len(DEFAULT_ROOM_NAMES):
            raise ValueError(
                f"{setting} cannot exceed the room name pool size "
                f"({len(DEFAULT_ROOM_NAMES)}); got {num_rooms}"
            )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        cls.check_room_count(cls.NUM_ROOMS)

        if not cls.DIR_PREFIX.strip():
            raise ValueError("ROOMCRAWL_DIR_PREFIX must not be empty")

        if cls.MAX_BUILD_ATTEMPTS <= 0:
            raise ValueError("ROOMCRAWL_MAX_BUILD_ATTEMPTS must be positive")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Roomcrawl Configuration:",
            f"  Rooms: {cls.NUM_ROOMS}",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
            f"  Directory Prefix: {cls.DIR_PREFIX}",
            f"  Root: {cls.ROOT_DIR}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
