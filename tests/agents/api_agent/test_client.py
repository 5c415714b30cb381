import httpx
import pytest
import pytest_asyncio
import respx

from agents.api_agent.client import (
    QUERY_TEMPLATES,
    SearchClientError,
    SearchRequestFailed,
    SerpAPIClient,
    StockDataFetchError,
    build_queries,
    fetch_stock_data,
    top_results,
)
from agents.api_agent.config import settings
from agents.api_agent.models import QueryCategory

SERP_URL = "https://serpapi.test/search.json"


def _organic(prefix, count):
    return {"organic_results": [
        {"title": f"{prefix} {i}", "snippet": f"{prefix} snippet {i}", "link": f"https://example.com/{i}", "position": i}
        for i in range(count)
    ]}


def _category_for(request: httpx.Request) -> QueryCategory:
    query = request.url.params["q"]
    for category, template in QUERY_TEMPLATES.items():
        if query == template.format(symbol=query.split(" ")[0]):
            return category
    raise AssertionError(f"unexpected query {query}")


@pytest_asyncio.fixture
async def serp_client():
    client = SerpAPIClient(api_key="test-key", base_url=SERP_URL)
    yield client
    await client.aclose()


def test_build_queries():
    queries = dict(build_queries("NVDA"))

    assert list(queries) == [
        QueryCategory.MARKET_DATA, QueryCategory.FINANCIALS, QueryCategory.ANALYSIS, QueryCategory.NEWS,
    ]
    assert queries[QueryCategory.MARKET_DATA] == "NVDA stock current price market cap volume PE ratio 52-week high low"
    assert queries[QueryCategory.NEWS] == "NVDA stock breaking news market moves catalysts last 24 hours"


def test_top_results_limits_and_defaults():
    assert [r.title for r in top_results(_organic("x", 5))] == ["x 0", "x 1", "x 2"]
    assert top_results({"search_metadata": {}}) == []
    assert top_results({"organic_results": [{"title": "no snippet"}]})[0].snippet == ""


def test_top_results_coerces_non_string_text():
    results = top_results({"organic_results": [{"title": 2024, "snippet": 182.5}, {"snippet": ["a", "b"]}]})

    assert results[0].title == "2024"
    assert results[0].snippet == "182.5"
    assert results[1].snippet == "['a', 'b']"


@pytest.mark.asyncio
async def test_search_sends_query_and_key(serp_client):
    with respx.mock:
        route = respx.get(url__startswith=SERP_URL).respond(status_code=200, json=_organic("r", 1))

        document = await serp_client.search("AAPL stock news")

        assert document["organic_results"][0]["title"] == "r 0"
        params = route.calls.last.request.url.params
        assert params["q"] == "AAPL stock news"
        assert params["api_key"] == "test-key"


@pytest.mark.asyncio
async def test_search_non_2xx(serp_client):
    with respx.mock:
        respx.get(url__startswith=SERP_URL).respond(status_code=401)

        with pytest.raises(SearchRequestFailed) as exc_info:
            await serp_client.search("AAPL stock news")

    assert exc_info.value.status_code == 401
    assert str(exc_info.value) == "SERP API request failed: Unauthorized"


@pytest.mark.asyncio
async def test_search_transport_error_attempted_once(serp_client):
    with respx.mock:
        route = respx.get(url__startswith=SERP_URL)
        route.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(SearchClientError):
            await serp_client.search("AAPL stock news")

        assert route.call_count == settings.SEARCH_MAX_ATTEMPTS == 1


@pytest.mark.asyncio
async def test_fetch_stock_data_success(serp_client):
    def respond(request):
        category = _category_for(request)
        return httpx.Response(200, json=_organic(category.value, 4))

    with respx.mock:
        route = respx.get(url__startswith=SERP_URL).mock(side_effect=respond)

        bundle = await fetch_stock_data("AAPL", serp_client)

        assert route.call_count == 4

    for category in QueryCategory:
        snippets = bundle.snippets(category)
        assert snippets == [f"{category.value} snippet {i}" for i in range(3)]


@pytest.mark.asyncio
async def test_fetch_stock_data_missing_organic_results(serp_client):
    with respx.mock:
        respx.get(url__startswith=SERP_URL).respond(status_code=200, json={"search_metadata": {"status": "Success"}})

        bundle = await fetch_stock_data("AAPL", serp_client)

    assert bundle.model_dump() == {"market_data": [], "financials": [], "analysis": [], "news": []}


@pytest.mark.asyncio
async def test_fetch_stock_data_fails_on_any_category(serp_client):
    def respond(request):
        if _category_for(request) == QueryCategory.FINANCIALS:
            return httpx.Response(500)
        return httpx.Response(200, json=_organic("ok", 3))

    with respx.mock:
        respx.get(url__startswith=SERP_URL).mock(side_effect=respond)

        with pytest.raises(StockDataFetchError) as exc_info:
            await fetch_stock_data("AAPL", serp_client)

    assert str(exc_info.value) == (
        "Failed to fetch stock data: SERP API request failed for financials: Internal Server Error"
    )
    assert exc_info.value.__cause__.category == "financials"
