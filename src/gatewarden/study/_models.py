"""Study topics, rotation state, and research results.

These are persisted or exchanged as JSON with camelCase keys
(`lastIndex`, `lastStudied`, `knowledgeGraph`).
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _JsonModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Topic(_JsonModel):
    """A named group of search queries."""

    name: str = Field(min_length=1)
    queries: tuple[str, ...] = ()


class TopicList(_JsonModel):
    """Shape of a topics file: `{"topics": [...]}`."""

    topics: tuple[Topic, ...] = ()


class TopicState(_JsonModel):
    """Round-robin position and per-topic completion times.

    Attributes:
        last_index: Index of the most recently selected topic, -1 if none.
        last_studied: Topic name to ISO timestamp of its last completed study.
    """

    last_index: int = -1
    last_studied: dict[str, str] = Field(default_factory=dict)


class SearchHit(_JsonModel):
    title: str = ""
    url: str = ""
    snippet: str = ""
    content: str | None = None


class KnowledgePanel(_JsonModel):
    title: str = ""
    type: str | None = None
    description: str | None = None


class ResearchResult(_JsonModel):
    """Everything learned from one query."""

    query: str
    timestamp: str
    results: tuple[SearchHit, ...] = ()
    knowledge_graph: KnowledgePanel | None = None


class StudyReport(_JsonModel):
    """A rendered Markdown report for one topic."""

    topic: str
    timestamp: str
    markdown: str
