"""Topic selection."""

from collections.abc import Sequence

from gatewarden.exceptions import TopicNotFoundError, TopicsNotConfiguredError

from ._models import Topic, TopicState


def next_topic(topics: Sequence[Topic], state: TopicState) -> tuple[Topic, TopicState]:
    """Pick the topic after the last one studied, wrapping around.

    Args:
        topics: Configured topics.
        state: Current rotation state.

    Returns:
        The selected topic and the advanced state.

    Raises:
        TopicsNotConfiguredError: If topics is empty.
    """
    if not topics:
        msg = "Cannot rotate over an empty topic list"
        raise TopicsNotConfiguredError(msg)

    index = (state.last_index + 1) % len(topics)
    return topics[index], state.model_copy(update={"last_index": index})


def study_topic(name: str, topics: Sequence[Topic]) -> Topic:
    """Look up a topic by name.

    Raises:
        TopicNotFoundError: If no topic has that name.
    """
    for topic in topics:
        if topic.name == name:
            return topic

    available = tuple(t.name for t in topics)
    msg = f'Topic "{name}" not found. Available: {", ".join(available)}'
    raise TopicNotFoundError(msg, topic_name=name, available=available)


def study_all(topics: Sequence[Topic]) -> list[Topic]:
    if not topics:
        msg = "No topics configured"
        raise TopicsNotConfiguredError(msg)
    return list(topics)


def mark_studied(state: TopicState, topic: Topic, timestamp: str) -> TopicState:
    return state.model_copy(update={"last_studied": {**state.last_studied, topic.name: timestamp}})
