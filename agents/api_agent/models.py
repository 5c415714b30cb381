# agents/api_agent/models.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class QueryCategory(str, Enum):
    MARKET_DATA = "market_data"
    FINANCIALS = "financials"
    ANALYSIS = "analysis"
    NEWS = "news"


class SearchResult(BaseModel):
    """One organic search hit. SerpAPI items carry more keys; only these are kept."""
    title: str = ""
    snippet: str = ""
    link: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("title", "snippet", mode="before")
    @classmethod
    def missing_text_is_empty(cls, v):
        return "" if v is None else str(v)


class StockDataBundle(BaseModel):
    """Search snippets gathered for one symbol, grouped by query category."""
    market_data: List[SearchResult] = Field(default_factory=list)
    financials: List[SearchResult] = Field(default_factory=list)
    analysis: List[SearchResult] = Field(default_factory=list)
    news: List[SearchResult] = Field(default_factory=list)

    def snippets(self, category: QueryCategory) -> List[str]:
        return [item.snippet for item in getattr(self, category.value)]

    def snippet_text(self, category: QueryCategory) -> str:
        """Newline-joined snippets for a category, as embedded in prompts."""
        return "\n".join(self.snippets(category))
