"""Rotating study sessions: topic selection, web research, and reports."""

from ._html import strip_html
from ._models import (
    KnowledgePanel,
    ResearchResult,
    SearchHit,
    StudyReport,
    Topic,
    TopicList,
    TopicState,
)
from ._report import format_study_report
from ._rotator import mark_studied, next_topic, study_all, study_topic
from ._search import SERPER_URL, SearchClient, SerperSearchClient
from ._session import StudySession
from ._state import TopicStateRepository
from ._topics import load_topics

__all__ = [
    "SERPER_URL",
    "KnowledgePanel",
    "ResearchResult",
    "SearchClient",
    "SearchHit",
    "SerperSearchClient",
    "StudyReport",
    "StudySession",
    "Topic",
    "TopicList",
    "TopicState",
    "TopicStateRepository",
    "format_study_report",
    "load_topics",
    "mark_studied",
    "next_topic",
    "strip_html",
    "study_all",
    "study_topic",
]
