"""Topic list loading.

A topics file synchronized through the durable store takes precedence over
the default list shipped with the package.
"""

from importlib.resources import files
from pathlib import Path

from pydantic import ValidationError

from gatewarden.exceptions import TopicsNotConfiguredError

from ._models import Topic, TopicList

DEFAULT_TOPICS_RESOURCE = "topics.default.json"


def _parse_topics(raw: str, source: Path | None) -> tuple[Topic, ...]:
    try:
        topic_list = TopicList.model_validate_json(raw)
    except ValidationError as e:
        msg = f"Malformed topics file {source or DEFAULT_TOPICS_RESOURCE}: {e}"
        raise TopicsNotConfiguredError(msg, path=source) from e
    return topic_list.topics


def load_topics(topics_file: Path | None = None) -> tuple[Topic, ...]:
    """Load the configured topics.

    Args:
        topics_file: Synchronized topics file. Used when it exists,
            otherwise the packaged default is read.

    Returns:
        The topics, in file order.

    Raises:
        TopicsNotConfiguredError: If the chosen file is malformed or lists
            no topics.
    """
    if topics_file is not None and topics_file.is_file():
        try:
            raw = topics_file.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read topics file {topics_file}: {e}"
            raise TopicsNotConfiguredError(msg, path=topics_file) from e
        source: Path | None = topics_file
    else:
        resource = files("gatewarden.study").joinpath(DEFAULT_TOPICS_RESOURCE)
        raw = resource.read_text(encoding="utf-8")
        source = None

    topics = _parse_topics(raw, source)
    if not topics:
        msg = f"No topics configured in {source or DEFAULT_TOPICS_RESOURCE}"
        raise TopicsNotConfiguredError(msg, path=source)
    return topics
