"""Markdown rendering of study results."""

from collections.abc import Sequence

import pendulum

from ._models import ResearchResult, StudyReport, Topic

RESULTS_PER_SECTION = 3


def format_study_report(
    topic: Topic,
    results: Sequence[ResearchResult | None],
    now: pendulum.DateTime,
    *,
    timezone: str = "Asia/Seoul",
) -> StudyReport:
    """Render one topic's research as Markdown.

    Failed queries (None slots) are left out of the body.

    Args:
        topic: The studied topic.
        results: One entry per query, None where the query failed.
        now: Completion time.
        timezone: Timezone for the human-readable header.

    Returns:
        The report together with its completion timestamp.
    """
    local = now.in_timezone(timezone)
    timestamp = now.in_timezone("UTC").to_iso8601_string()

    lines = [f"## Auto-Study: {topic.name} ({local.format('YYYY-MM-DD HH:mm')})", ""]
    for research in results:
        if research is None:
            continue

        lines.extend([f'### "{research.query}"', ""])
        if panel := research.knowledge_graph:
            kind = panel.type or "info"
            lines.extend([f"**{panel.title}** ({kind}): {panel.description or ''}", ""])

        for hit in research.results[:RESULTS_PER_SECTION]:
            bullet = f"- **{hit.title}**: {hit.snippet}"
            if hit.url:
                bullet += f" ([link]({hit.url}))"
            lines.append(bullet)
        lines.append("")

    lines.extend(["---", f"_Auto-studied at {timestamp}_", ""])
    return StudyReport(topic=topic.name, timestamp=timestamp, markdown="\n".join(lines))
