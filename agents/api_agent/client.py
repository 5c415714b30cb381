# agents/api_agent/client.py

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from .config import settings
from .models import QueryCategory, SearchResult, StockDataBundle

logger = logging.getLogger(__name__)


QUERY_TEMPLATES: Dict[QueryCategory, str] = {
    QueryCategory.MARKET_DATA: "{symbol} stock current price market cap volume PE ratio 52-week high low",
    QueryCategory.FINANCIALS: "{symbol} stock quarterly revenue profit margins earnings growth",
    QueryCategory.ANALYSIS: "{symbol} stock analyst buy sell ratings price targets next 12 months",
    QueryCategory.NEWS: "{symbol} stock breaking news market moves catalysts last 24 hours",
}


class SearchClientError(Exception):
    """Base exception for search client errors."""
    pass


class SearchRequestFailed(SearchClientError):
    """Raised when the search API answers with a non-2xx status."""

    def __init__(self, status_code: int, status_text: str, category: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text
        self.category = category
        target = f" for {category}" if category else ""
        super().__init__(f"SERP API request failed{target}: {status_text}")


class StockDataFetchError(SearchClientError):
    """Raised when any of a symbol's category searches fails."""
    pass


class SearchClient(Protocol):
    async def search(self, query: str) -> Dict[str, Any]:
        ...


def build_queries(symbol: str) -> List[Tuple[QueryCategory, str]]:
    return [(category, template.format(symbol=symbol)) for category, template in QUERY_TEMPLATES.items()]


class SerpAPIClient:
    """Google web search through SerpAPI."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = settings.SERPAPI_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.SERP_API_KEY
        self.base_url = base_url
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=settings.TIMEOUT) if settings.TIMEOUT else httpx.AsyncClient()
        self.client = http_client

    async def _get(self, query: str) -> httpx.Response:
        retryer = AsyncRetrying(
            stop=stop_after_attempt(settings.SEARCH_MAX_ATTEMPTS),
            wait=wait_fixed(settings.RETRY_DELAY),
            retry=retry_if_exception_type(httpx.RequestError),
            reraise=True,
        )
        return await retryer(self.client.get, self.base_url, params={"q": query, "api_key": self.api_key})

    async def search(self, query: str) -> Dict[str, Any]:
        """
        Run one search and return the decoded JSON document.

        Raises:
            SearchRequestFailed: non-2xx response.
            SearchClientError: transport failure or undecodable body.
        """
        try:
            response = await self._get(query)
        except httpx.RequestError as e:
            raise SearchClientError(f"SERP API request error: {e}") from e

        if not response.is_success:
            raise SearchRequestFailed(response.status_code, response.reason_phrase or str(response.status_code))

        try:
            return response.json()
        except ValueError as e:
            raise SearchClientError(f"SERP API returned invalid JSON: {e}") from e

    async def aclose(self) -> None:
        await self.client.aclose()


def top_results(document: Dict[str, Any], limit: int = settings.RESULTS_PER_CATEGORY) -> List[SearchResult]:
    organic = document.get("organic_results") or []
    return [SearchResult.model_validate(item) for item in organic[:limit]]


async def _fetch_category(
    search_client: SearchClient, category: QueryCategory, query: str
) -> Tuple[QueryCategory, List[SearchResult]]:
    try:
        document = await search_client.search(query)
    except SearchRequestFailed as e:
        raise SearchRequestFailed(e.status_code, e.status_text, category.value) from e
    return category, top_results(document)


async def fetch_stock_data(symbol: str, search_client: SearchClient) -> StockDataBundle:
    """
    Gather the four-category bundle for one symbol.

    The category searches run concurrently; the first failure aborts the fetch.
    """
    try:
        results = await asyncio.gather(
            *(_fetch_category(search_client, category, query) for category, query in build_queries(symbol))
        )
    except Exception as e:
        logger.error(f"Stock data fetch error for {symbol}: {e}")
        raise StockDataFetchError(f"Failed to fetch stock data: {e}") from e

    bundle = StockDataBundle(**{category.value: items for category, items in results})
    logger.debug(
        f"Fetched bundle for {symbol}: "
        + ", ".join(f"{c.value}={len(bundle.snippets(c))}" for c in QueryCategory)
    )
    return bundle


_search_client: Optional[SerpAPIClient] = None


def get_search_client() -> SerpAPIClient:
    global _search_client
    if _search_client is None:
        _search_client = SerpAPIClient()
    return _search_client


async def close_search_client() -> None:
    global _search_client
    if _search_client is not None:
        await _search_client.aclose()
        _search_client = None
