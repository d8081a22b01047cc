"""Durable-store synchronization for the gateway's persistent directory."""

from ._synchronizer import (
    BackupSynchronizer,
    SyncAction,
    SyncReason,
    SyncResult,
    copy_tree,
)
from ._timestamps import parse_timestamp, read_timestamp, write_timestamp

__all__ = [
    "BackupSynchronizer",
    "SyncAction",
    "SyncReason",
    "SyncResult",
    "copy_tree",
    "parse_timestamp",
    "read_timestamp",
    "write_timestamp",
]
