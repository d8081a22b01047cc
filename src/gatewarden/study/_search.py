# pyright: reportAny=false
"""Web search through the Serper API."""

from typing import Any, Protocol, final

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gatewarden.exceptions import SearchError
from gatewarden.utils import Clock, SystemClock

from ._html import strip_html
from ._models import KnowledgePanel, ResearchResult, SearchHit

SERPER_URL = "https://google.serper.dev/search"
SEARCH_TIMEOUT = 15.0
FETCH_TIMEOUT = 8.0

_REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})


class SearchClient(Protocol):
    """Researches a single query."""

    async def research(self, query: str) -> ResearchResult:
        """Search for a query. May raise; callers convert failures to None."""
        ...


@retry(
    retry=retry_if_exception_type((httpx.ConnectError, httpx.TimeoutException)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
    reraise=True,
)
async def _post_search(
    client: httpx.AsyncClient,
    api_key: str,
    query: str,
    num: int,
) -> httpx.Response:
    """Send the search request with retry logic.

    Raises:
        httpx.ConnectError: If connection fails after retries.
        httpx.TimeoutException: If request times out after retries.
    """
    return await client.post(
        SERPER_URL,
        headers={"X-API-KEY": api_key, "Content-Type": "application/json"},
        json={"q": query, "num": num},
        timeout=SEARCH_TIMEOUT,
    )


@final
class SerperSearchClient:
    """Searches Google through Serper and optionally fetches result pages."""

    __slots__ = (
        "_api_key",
        "_client",
        "_clock",
        "_fetch_content",
        "_fetch_limit",
        "_max_content_chars",
        "_results_per_query",
    )

    def __init__(  # noqa: PLR0913
        self,
        api_key: str,
        client: httpx.AsyncClient,
        *,
        results_per_query: int = 5,
        fetch_content: bool = True,
        fetch_limit: int = 3,
        max_content_chars: int = 2000,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Serper API key.
            client: Shared HTTP client; the caller owns its lifetime.
            results_per_query: Results requested per search.
            fetch_content: Whether to fetch page text for top results.
            fetch_limit: How many results get their page fetched.
            max_content_chars: Truncation limit for page text.
            clock: Time source for result timestamps.
        """
        self._api_key = api_key
        self._client = client
        self._results_per_query = results_per_query
        self._fetch_content = fetch_content
        self._fetch_limit = fetch_limit
        self._max_content_chars = max_content_chars
        self._clock: Clock = clock or SystemClock()

    async def fetch_page(self, url: str, *, redirects: int = 1) -> str | None:
        """Fetch a page and return its visible text, truncated.

        Args:
            url: Page to fetch.
            redirects: Redirect hops still allowed.

        Returns:
            The text, or None if the page could not be fetched.
        """
        try:
            response = await self._client.get(url, timeout=FETCH_TIMEOUT, follow_redirects=False)
        except httpx.HTTPError:
            return None

        if response.status_code in _REDIRECT_CODES:
            location = response.headers.get("location")
            if location and redirects > 0:
                target = str(response.url.join(location))
                return await self.fetch_page(target, redirects=redirects - 1)
            return None
        if response.status_code != httpx.codes.OK:
            return None

        return strip_html(response.text)[: self._max_content_chars]

    async def research(self, query: str) -> ResearchResult:
        """Search for a query and collect results.

        Args:
            query: The search query.

        Returns:
            Results with page content for the first `fetch_limit` hits.

        Raises:
            SearchError: If the search API fails or answers malformed JSON.
        """
        try:
            response = await _post_search(
                self._client, self._api_key, query, self._results_per_query
            )
        except httpx.HTTPError as e:
            msg = f"Search request failed for {query!r}: {e}"
            raise SearchError(msg, query=query) from e

        if response.status_code != httpx.codes.OK:
            msg = f"Serper API error: {response.status_code} {response.text}"
            raise SearchError(msg, query=query, status_code=response.status_code)

        try:
            data: dict[str, Any] = response.json()  # pyright: ignore[reportExplicitAny]
            organic: list[dict[str, Any]] = data.get("organic") or []  # pyright: ignore[reportExplicitAny]
            hits: list[SearchHit] = []
            for index, item in enumerate(organic):
                url = str(item.get("link") or "")
                content = None
                if self._fetch_content and index < self._fetch_limit and url:
                    content = await self.fetch_page(url)
                hits.append(
                    SearchHit(
                        title=str(item.get("title") or ""),
                        url=url,
                        snippet=str(item.get("snippet") or ""),
                        content=content,
                    )
                )

            panel = None
            if graph := data.get("knowledgeGraph"):
                panel = KnowledgePanel.model_validate(graph)
        except (ValueError, AttributeError) as e:
            msg = f"Malformed search response for {query!r}: {e}"
            raise SearchError(msg, query=query) from e

        return ResearchResult(
            query=query,
            timestamp=self._clock.now().to_iso8601_string(),
            results=tuple(hits),
            knowledge_graph=panel,
        )
