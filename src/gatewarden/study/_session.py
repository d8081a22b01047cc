"""A study run: select topics, research their queries, render reports."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, final

import anyio

from gatewarden.config import StudyConfig
from gatewarden.utils import Clock, SystemClock

from ._models import ResearchResult, StudyReport, Topic, TopicState
from ._report import format_study_report
from ._rotator import mark_studied, next_topic, study_all, study_topic
from ._search import SearchClient
from ._state import TopicStateRepository

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class StudySession:
    """Researches topics and keeps the rotation state current.

    Topic selection happens before any network call, so an unknown topic
    name fails fast. In round-robin mode the advanced index is saved right
    after selection; `last_studied` is saved after each topic completes.
    """

    __slots__ = ("_clock", "_config", "_logger", "_repository", "_search")

    def __init__(  # noqa: PLR0913
        self,
        config: StudyConfig,
        repository: TopicStateRepository,
        search: SearchClient,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._repository = repository
        self._search = search
        self._logger = logger.bind(component="study")
        self._clock: Clock = clock or SystemClock()

    def select(
        self,
        topics: Sequence[Topic],
        *,
        topic_name: str | None = None,
        all_topics: bool = False,
    ) -> tuple[list[Topic], TopicState]:
        """Choose what to study and persist the rotation index.

        Args:
            topics: Configured topics.
            topic_name: Study only this topic.
            all_topics: Study every topic.

        Returns:
            The topics to study and the state after selection.

        Raises:
            TopicNotFoundError: If topic_name is not configured.
            TopicsNotConfiguredError: If topics is empty.
        """
        state = self._repository.load()
        if all_topics:
            return study_all(topics), state
        if topic_name is not None:
            return [study_topic(topic_name, topics)], state

        topic, state = next_topic(topics, state)
        _ = self._repository.save(state)
        return [topic], state

    async def research_query(self, query: str) -> ResearchResult | None:
        """Research one query, converting any failure to None."""
        self._logger.info("study_query", query=query)
        result: ResearchResult | None = None
        with anyio.move_on_after(self._config.query_timeout) as scope:
            try:
                result = await self._search.research(query)
            except Exception as e:  # noqa: BLE001
                self._logger.warning("study_query_failed", query=query, error=str(e))
                return None

        if scope.cancelled_caught:
            self._logger.warning("study_query_failed", query=query, error="timeout")
        return result

    async def study(self, topic: Topic) -> StudyReport:
        self._logger.info("study_topic_started", topic=topic.name, queries=len(topic.queries))
        results = [await self.research_query(query) for query in topic.queries]
        report = format_study_report(
            topic,
            results,
            self._clock.now(),
            timezone=self._config.report_timezone,
        )
        self._logger.info(
            "study_topic_completed",
            topic=topic.name,
            failed_queries=sum(1 for r in results if r is None),
        )
        return report

    async def run(
        self,
        topics: Sequence[Topic],
        *,
        topic_name: str | None = None,
        all_topics: bool = False,
    ) -> list[StudyReport]:
        """Study the selected topics in order.

        Args:
            topics: Configured topics.
            topic_name: Study only this topic.
            all_topics: Study every topic.

        Returns:
            One report per studied topic.
        """
        selected, state = self.select(topics, topic_name=topic_name, all_topics=all_topics)

        reports: list[StudyReport] = []
        for topic in selected:
            report = await self.study(topic)
            state = mark_studied(state, topic, report.timestamp)
            _ = self._repository.save(state)
            reports.append(report)
        return reports
