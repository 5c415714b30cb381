import pytest
from typing import List, Optional

from agents.api_agent.models import SearchResult, StockDataBundle
from agents.language_agent.models import ChatTurn


class FakeGenerator:
    """Deterministic stand-in for the text-generation model."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[ChatTurn]] = []

    async def generate(self, messages: List[ChatTurn]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def prompts(self) -> List[str]:
        return [messages[-1].content for messages in self.calls]


@pytest.fixture
def fake_generator():
    return FakeGenerator


@pytest.fixture
def sample_bundle():
    """
    Sample search bundle for testing
    """
    return StockDataBundle(
        market_data=[
            SearchResult(title="TSLA quote", snippet="Tesla trades at $250.10, market cap $800B."),
            SearchResult(title="TSLA range", snippet="52-week range 138.80 - 299.29."),
        ],
        financials=[SearchResult(title="Q3", snippet="Quarterly revenue rose 8% to $25.2B.")],
        analysis=[SearchResult(title="Ratings", snippet="Analysts rate Tesla a HOLD with a $245 target.")],
        news=[SearchResult(title="News", snippet="Tesla shares jump after delivery beat.")],
    )
