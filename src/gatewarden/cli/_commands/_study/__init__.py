# pyright: reportUnusedCallResult=false
"""gatewarden study command - runs one research session."""

import os
from typing import TYPE_CHECKING, Annotated

import anyio
import httpx
from cyclopts import App, Parameter

from gatewarden.cli._context import CLIContext
from gatewarden.exceptions import ConfigError, TopicNotFoundError
from gatewarden.schedule import SEARCH_KEY_ENV
from gatewarden.study import (
    SerperSearchClient,
    StudyReport,
    StudySession,
    Topic,
    TopicStateRepository,
    load_topics,
)

from .._shared import ExitCode, exit_with_error

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from gatewarden.config import StudyConfig

app = App(
    name="study",
    help="Research the next topic and print a Markdown report",
    help_on_error=True,
)


async def _run_study(  # noqa: PLR0913
    config: "StudyConfig",  # noqa: UP037
    api_key: str,
    topics: tuple[Topic, ...],
    logger: "FilteringBoundLogger",  # noqa: UP037
    *,
    topic_name: str | None,
    all_topics: bool,
) -> list[StudyReport]:
    async with httpx.AsyncClient(headers={"User-Agent": "gatewarden-study"}) as client:
        session = StudySession(
            config,
            TopicStateRepository(config.state_file, logger),
            SerperSearchClient(
                api_key,
                client,
                results_per_query=config.results_per_query,
                fetch_content=config.fetch_content,
                fetch_limit=config.fetch_limit,
                max_content_chars=config.max_content_chars,
            ),
            logger,
        )
        return await session.run(topics, topic_name=topic_name, all_topics=all_topics)


@app.default
def study(
    *,
    topic: Annotated[
        str | None,
        Parameter(help="Study only this topic."),
    ] = None,
    all_topics: Annotated[
        bool,
        Parameter(name="--all", help="Study every configured topic."),
    ] = False,
) -> None:
    """Study topics and print the report to stdout.

    Without options, picks the next topic in round-robin order.
    """
    ctx = CLIContext.get_current()
    config = ctx.config.study
    logger = ctx.logger.bind(command="study")

    api_key = os.environ.get(SEARCH_KEY_ENV, "")
    if not api_key:
        exit_with_error(f"{SEARCH_KEY_ENV} is not set", ExitCode.CONFIG_ERROR)

    try:
        topics = load_topics(config.topics_file)
        reports = anyio.run(
            lambda: _run_study(
                config,
                api_key,
                topics,
                logger,
                topic_name=topic,
                all_topics=all_topics,
            )
        )
    except TopicNotFoundError as e:
        exit_with_error(str(e), ExitCode.NOT_FOUND)
    except ConfigError as e:
        exit_with_error(str(e), ExitCode.CONFIG_ERROR)

    print("\n".join(report.markdown for report in reports))  # noqa: T201
