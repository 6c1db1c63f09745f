"""Logging utilities for Roomcrawl.

Provides color-coded console diagnostics for the generator and player. The game
transcript itself is written by the session; these helpers only emit traces
when verbose output is enabled, so a normal play-through stays clean.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Deterministic operations (build, parse)
    YELLOW = "\033[93m"    # Cross-thread handoff
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ROOMCRAWL_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ROOMCRAWL_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """Return True when diagnostic traces should be printed."""
    if os.getenv("ROOMCRAWL_VERBOSE"):
        return True
    return os.getenv("LOG_LEVEL", "INFO").upper() == "DEBUG"


def log_deterministic(message: str) -> None:
    """Log a deterministic operation (blue)."""
    if verbose_enabled():
        print(colored(message, Color.BLUE))


def log_handoff(message: str) -> None:
    """Log a timekeeper handoff (yellow)."""
    if verbose_enabled():
        print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red). Always printed."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    if verbose_enabled():
        print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    if verbose_enabled():
        print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"  # Deterministic operation
LOG_TAG_HANDOFF = "[⇄]"        # Timekeeper handoff
LOG_TAG_ERROR = "[!]"          # Error
LOG_TAG_SUCCESS = "[✓]"        # Success
LOG_TAG_INFO = "[i]"           # Information
