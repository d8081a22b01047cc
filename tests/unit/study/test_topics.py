import json
from pathlib import Path

import pytest

from gatewarden.exceptions import TopicsNotConfiguredError
from gatewarden.study import load_topics


class TestLoadTopics:
    def test_packaged_default_when_no_file(self, tmp_path: Path) -> None:
        topics = load_topics(tmp_path / "study-topics.json")

        assert [t.name for t in topics] == ["ai-agents", "crypto-market", "tech-news"]
        assert all(t.queries for t in topics)

    def test_packaged_default_when_none(self) -> None:
        assert load_topics(None)[0].name == "ai-agents"

    def test_synchronized_file_takes_precedence(self, tmp_path: Path) -> None:
        path = tmp_path / "study-topics.json"
        path.write_text(
            json.dumps({"topics": [{"name": "korean-food", "queries": ["kimchi recipes"]}]})
        )

        topics = load_topics(path)

        assert len(topics) == 1
        assert topics[0].name == "korean-food"
        assert topics[0].queries == ("kimchi recipes",)

    def test_malformed_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "study-topics.json"
        path.write_text('{"topics": "nope"}')

        with pytest.raises(TopicsNotConfiguredError) as exc_info:
            _ = load_topics(path)

        assert exc_info.value.path == path

    def test_empty_list_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "study-topics.json"
        path.write_text('{"topics": []}')

        with pytest.raises(TopicsNotConfiguredError, match="No topics configured"):
            _ = load_topics(path)
