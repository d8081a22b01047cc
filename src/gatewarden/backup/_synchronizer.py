"""Backup and restore of the gateway's persistent directory.

The durable store is a mounted directory that survives container
restarts. Each side keeps a sync timestamp; the restore at boot only
pulls the snapshot when the durable store's timestamp is strictly newer
than the local one, so last-write-wins without a distributed lock.
"""

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Never, final

import anyio
import anyio.to_thread

from gatewarden.config import BackupConfig
from gatewarden.exceptions import SyncError
from gatewarden.utils import Clock, SystemClock

from ._timestamps import parse_timestamp, read_timestamp, write_timestamp

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


class SyncAction(StrEnum):
    """Direction of a synchronization."""

    PUSH = "push"
    RESTORE = "restore"


class SyncReason(StrEnum):
    """Why a synchronization ended the way it did."""

    PUSHED = "pushed"
    RESTORED = "restored"
    NO_BACKUP = "no_backup"
    LOCAL_UP_TO_DATE = "local_up_to_date"
    NOT_MOUNTED = "not_mounted"
    LOCAL_MISSING = "local_missing"
    TIMEOUT = "timeout"
    IO_ERROR = "io_error"


_SUCCESS_REASONS = frozenset({SyncReason.PUSHED, SyncReason.RESTORED})


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of a push or restore.

    Attributes:
        action: Which direction ran.
        reason: How it ended.
        timestamp: The sync timestamp written, if any.
        detail: Error text for failures.
    """

    action: SyncAction
    reason: SyncReason
    timestamp: str | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        """Whether data was copied."""
        return self.reason in _SUCCESS_REASONS

    @property
    def restored(self) -> bool:
        """Whether a restore replaced local state."""
        return self.reason == SyncReason.RESTORED


def copy_tree(source: Path, destination: Path, exclude: tuple[str, ...]) -> None:
    """Overlay source onto destination.

    Files only present in destination are left alone; files with the same
    relative path are overwritten.

    Args:
        source: Directory to copy from.
        destination: Directory to copy into (created if missing).
        exclude: Glob patterns to skip.
    """
    _ = shutil.copytree(
        source,
        destination,
        dirs_exist_ok=True,
        ignore=shutil.ignore_patterns(*exclude) if exclude else None,
    )


@final
class BackupSynchronizer:
    """Pushes local state to the durable store and restores it at boot.

    Every filesystem operation runs in a worker thread under a hard
    deadline. A stuck mount is abandoned rather than waited on, and no
    failure is ever raised to the caller.
    """

    __slots__ = ("_clock", "_config", "_exclude", "_logger")

    def __init__(
        self,
        config: BackupConfig,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            config: Paths, intervals, and timeouts.
            logger: Logger for sync outcomes.
            clock: Time source for timestamps and the periodic timer.
        """
        self._config = config
        self._logger = logger.bind(component="backup")
        self._clock: Clock = clock or SystemClock()
        # Timestamps are managed explicitly and never copied with the tree
        self._exclude = (*config.exclude, config.timestamp_file, f".{config.timestamp_file}.*.tmp")

    @property
    def local_timestamp_path(self) -> Path:
        return self._config.local_dir / self._config.timestamp_file

    @property
    def remote_timestamp_path(self) -> Path:
        return self._config.remote_dir / self._config.timestamp_file

    async def _run_bounded(
        self,
        action: SyncAction,
        func: Callable[[], SyncResult],
        timeout: float,
    ) -> SyncResult:
        result: SyncResult | None = None
        with anyio.move_on_after(timeout):
            try:
                result = await anyio.to_thread.run_sync(func, abandon_on_cancel=True)
            except SyncError as e:
                result = SyncResult(action=action, reason=SyncReason.IO_ERROR, detail=str(e))
            except Exception as e:  # noqa: BLE001
                detail = f"{action.value} failed unexpectedly: {type(e).__name__}: {e}"
                result = SyncResult(action=action, reason=SyncReason.IO_ERROR, detail=detail)

        if result is None:
            result = SyncResult(
                action=action,
                reason=SyncReason.TIMEOUT,
                detail=f"{action.value} exceeded {timeout:g}s",
            )
        return result

    def _restore_blocking(self) -> SyncResult:
        try:
            remote_stamp = read_timestamp(self.remote_timestamp_path)
            if remote_stamp is None:
                return SyncResult(action=SyncAction.RESTORE, reason=SyncReason.NO_BACKUP)

            local_stamp = read_timestamp(self.local_timestamp_path)
            remote_time = parse_timestamp(remote_stamp)
            if local_stamp is not None and remote_time <= parse_timestamp(local_stamp):
                return SyncResult(
                    action=SyncAction.RESTORE,
                    reason=SyncReason.LOCAL_UP_TO_DATE,
                    timestamp=local_stamp,
                )

            copy_tree(self._config.remote_dir, self._config.local_dir, self._exclude)
            write_timestamp(self.local_timestamp_path, remote_stamp)
        except OSError as e:
            msg = f"Restore from {self._config.remote_dir} failed: {e}"
            raise SyncError(msg, operation=SyncAction.RESTORE.value, cause=e) from e

        return SyncResult(
            action=SyncAction.RESTORE,
            reason=SyncReason.RESTORED,
            timestamp=remote_stamp,
        )

    def _push_blocking(self, stamp: str) -> SyncResult:
        if not self._config.mount_root.is_dir():
            return SyncResult(action=SyncAction.PUSH, reason=SyncReason.NOT_MOUNTED)
        if not self._config.local_dir.is_dir():
            return SyncResult(action=SyncAction.PUSH, reason=SyncReason.LOCAL_MISSING)

        try:
            copy_tree(self._config.local_dir, self._config.remote_dir, self._exclude)
            write_timestamp(self.local_timestamp_path, stamp)
            write_timestamp(self.remote_timestamp_path, stamp)
        except OSError as e:
            msg = f"Push to {self._config.remote_dir} failed: {e}"
            raise SyncError(msg, operation=SyncAction.PUSH.value, cause=e) from e

        return SyncResult(action=SyncAction.PUSH, reason=SyncReason.PUSHED, timestamp=stamp)

    async def restore(self) -> SyncResult:
        """Pull the durable snapshot into the local directory if it is newer.

        Returns:
            The outcome; `result.restored` tells whether local state changed.
        """
        result = await self._run_bounded(
            SyncAction.RESTORE,
            self._restore_blocking,
            self._config.restore_timeout,
        )

        match result.reason:
            case SyncReason.RESTORED:
                self._logger.info("backup_restored", timestamp=result.timestamp)
            case SyncReason.NO_BACKUP:
                self._logger.info("backup_not_found", remote_dir=str(self._config.remote_dir))
            case SyncReason.LOCAL_UP_TO_DATE:
                self._logger.info("backup_restore_skipped", local_timestamp=result.timestamp)
            case _:
                self._logger.warning(
                    "backup_restore_failed", reason=result.reason.value, detail=result.detail
                )
        return result

    async def push(self) -> SyncResult:
        """Copy the local directory to the durable store.

        Returns:
            The outcome. Failures are logged, never raised.
        """
        stamp = self._clock.now().to_iso8601_string()
        result = await self._run_bounded(
            SyncAction.PUSH,
            lambda: self._push_blocking(stamp),
            self._config.push_timeout,
        )

        if result.ok:
            self._logger.debug("backup_pushed", timestamp=result.timestamp)
        elif result.reason == SyncReason.NOT_MOUNTED:
            self._logger.debug("backup_push_skipped", reason=result.reason.value)
        else:
            self._logger.warning(
                "backup_push_failed", reason=result.reason.value, detail=result.detail
            )
        return result

    async def run_periodic(self) -> Never:
        """Push every `interval` seconds until cancelled."""
        self._logger.info("backup_periodic_started", interval_seconds=self._config.interval)
        while True:
            await self._clock.sleep(self._config.interval)
            _ = await self.push()
