import json
from pathlib import Path

from pyfakefs.fake_filesystem import FakeFilesystem

from gatewarden.study import TopicState, TopicStateRepository
from tests.conftest import LogCapture

STATE_PATH = Path("/root/clawd/.study-state.json")


class TestTopicStateRepository:
    def test_missing_file_is_fresh_state(self, fs: FakeFilesystem, log_capture: LogCapture) -> None:
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        assert repository.load() == TopicState()
        assert log_capture.events() == []

    def test_reads_camel_case_keys(self, fs: FakeFilesystem, log_capture: LogCapture) -> None:
        fs.create_file(
            STATE_PATH,
            contents=json.dumps(
                {"lastIndex": 2, "lastStudied": {"tech-news": "2026-01-01T00:00:00Z"}}
            ),
        )
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        state = repository.load()

        assert state.last_index == 2
        assert state.last_studied == {"tech-news": "2026-01-01T00:00:00Z"}

    def test_corrupt_file_is_fresh_state(self, fs: FakeFilesystem, log_capture: LogCapture) -> None:
        fs.create_file(STATE_PATH, contents="{not json")
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        assert repository.load() == TopicState()
        assert "study_state_corrupt" in log_capture.events("warning")

    def test_undecodable_file_is_fresh_state(
        self, fs: FakeFilesystem, log_capture: LogCapture
    ) -> None:
        fs.create_file(STATE_PATH, contents=b"\xff\xfe\x00")
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        assert repository.load() == TopicState()
        assert "study_state_corrupt" in log_capture.events("warning")

    def test_save_writes_camel_case_json(self, fs: FakeFilesystem, log_capture: LogCapture) -> None:
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        saved = repository.save(TopicState(last_index=1, last_studied={"ai-agents": "t"}))

        assert saved is True
        assert json.loads(STATE_PATH.read_text()) == {
            "lastIndex": 1,
            "lastStudied": {"ai-agents": "t"},
        }
        assert repository.load().last_index == 1

    def test_save_failure_is_logged(self, fs: FakeFilesystem, log_capture: LogCapture) -> None:
        # The parent "directory" is a file, so the write cannot succeed
        fs.create_file("/root/clawd")
        repository = TopicStateRepository(STATE_PATH, log_capture.logger)

        assert repository.save(TopicState(last_index=0)) is False
        assert "study_state_save_failed" in log_capture.events("warning")
