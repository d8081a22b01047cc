"""Persistence for the topic rotation state."""

from pathlib import Path
from typing import TYPE_CHECKING, final

from pydantic import ValidationError

from gatewarden.utils import write_json_atomic

from ._models import TopicState

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class TopicStateRepository:
    """Loads and saves TopicState as a small JSON file.

    The state file is local only and is not part of the synchronized
    snapshot. A missing or corrupt file reads as a fresh state.
    """

    __slots__ = ("_logger", "_path")

    def __init__(self, path: Path, logger: "FilteringBoundLogger") -> None:  # noqa: UP037
        self._path = path
        self._logger = logger.bind(component="study_state")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TopicState:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return TopicState()
        except UnicodeDecodeError as e:
            self._logger.warning("study_state_corrupt", path=str(self._path), error=str(e))
            return TopicState()
        except OSError as e:
            self._logger.warning("study_state_unreadable", path=str(self._path), error=str(e))
            return TopicState()

        try:
            return TopicState.model_validate_json(raw)
        except ValidationError as e:
            self._logger.warning("study_state_corrupt", path=str(self._path), error=str(e))
            return TopicState()

    def save(self, state: TopicState) -> bool:
        """Write the state atomically.

        Args:
            state: The state to persist.

        Returns:
            True on success. Failures are logged, not raised.
        """
        try:
            write_json_atomic(self._path, state.model_dump(mode="json", by_alias=True))
        except OSError as e:
            self._logger.warning("study_state_save_failed", path=str(self._path), error=str(e))
            return False
        return True
