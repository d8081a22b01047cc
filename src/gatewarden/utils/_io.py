# pyright: reportAny=false
"""Atomic file writes."""

import tempfile
from pathlib import Path
from typing import Any

import orjson


def atomic_write(path: Path, content: bytes | str) -> None:
    """Write content to a file atomically.

    Writes to a temporary file in the same directory, then renames it over
    the target, so readers see either the old or the new file.

    Args:
        path: Destination file path.
        content: Content to write.

    Raises:
        OSError: If the write or rename fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = content.encode("utf-8") if isinstance(content, str) else content
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb", dir=path.parent, delete=False, prefix=f".{path.name}.", suffix=".tmp"
        ) as f:
            _ = f.write(data)
            temp_path = Path(f.name)
        _ = temp_path.replace(path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:  # pyright: ignore[reportExplicitAny]
    """Serialize a dictionary as indented JSON and write it atomically.

    Args:
        path: Destination file path.
        data: JSON-serializable dictionary.

    Raises:
        OSError: If the write fails.
    """
    atomic_write(path, orjson.dumps(data, option=orjson.OPT_INDENT_2) + b"\n")
