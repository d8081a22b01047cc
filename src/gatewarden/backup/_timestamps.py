"""Sync timestamp files.

A sync timestamp is a single scalar, ISO 8601 or epoch seconds, stored in
a small text file on each side of the synchronization.
"""

import math
from pathlib import Path

import pendulum
from pendulum.parsing.exceptions import ParserError

from gatewarden.utils import atomic_write


def parse_timestamp(value: str | None) -> float:
    """Convert a stored timestamp to epoch seconds.

    Unparsable or empty values count as epoch 0, so a corrupt timestamp
    never blocks a restore but always loses to a readable one.

    Args:
        value: The raw stored value.

    Returns:
        Seconds since the epoch.
    """
    if value is None:
        return 0.0

    text = value.strip()
    if not text:
        return 0.0

    try:
        number = float(text)
    except ValueError:
        pass
    else:
        return number if math.isfinite(number) else 0.0

    try:
        parsed = pendulum.parse(text)
    except (ValueError, OverflowError, ParserError):
        return 0.0

    if isinstance(parsed, pendulum.DateTime):
        return parsed.timestamp()
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC").timestamp()
    return 0.0


def read_timestamp(path: Path) -> str | None:
    """Read a timestamp file.

    Undecodable bytes are replaced, so a corrupt file reads as an
    unparsable value (epoch 0) rather than failing.

    Args:
        path: The timestamp file.

    Returns:
        The stripped contents, or None if the file does not exist.
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace").strip()
    except FileNotFoundError:
        return None


def write_timestamp(path: Path, value: str) -> None:
    """Write a timestamp file, replacing it atomically.

    Args:
        path: The timestamp file.
        value: The timestamp to store.
    """
    atomic_write(path, f"{value}\n")
