# agents/language_agent/analyst.py

"""Per-symbol analysis synthesis."""
import logging

from agents.api_agent.models import QueryCategory, StockDataBundle

from .llm_client import LLMClientError, TextGenerator
from .models import AnalysisMode, ChatTurn
from .templates import render_prompt

logger = logging.getLogger(__name__)

# Plain substring checks on the lower-cased query, so "vs" also matches inside longer words.
COMPARISON_KEYWORDS = ("compare", "versus", "vs")
RECOMMENDATION_KEYWORDS = ("should i buy", "worth buying", "good investment")


def select_mode(query_text: str) -> AnalysisMode:
    """Pick the prompt variant from keywords in the user's query. Comparison wins over recommendation."""
    lowered = query_text.lower()
    if any(keyword in lowered for keyword in COMPARISON_KEYWORDS):
        return AnalysisMode.COMPARISON
    if any(keyword in lowered for keyword in RECOMMENDATION_KEYWORDS):
        return AnalysisMode.RECOMMENDATION
    return AnalysisMode.GENERAL


def build_analysis_prompt(symbol: str, bundle: StockDataBundle, query_text: str = "") -> str:
    mode = select_mode(query_text)
    return render_prompt(
        mode.template,
        symbol=symbol,
        market_data=bundle.snippet_text(QueryCategory.MARKET_DATA),
        financials=bundle.snippet_text(QueryCategory.FINANCIALS),
        analysis=bundle.snippet_text(QueryCategory.ANALYSIS),
        news=bundle.snippet_text(QueryCategory.NEWS),
    )


async def analyze_stock_data(
    symbol: str, bundle: StockDataBundle, query_text: str, generator: TextGenerator
) -> str:
    """
    Generate the report for one symbol.

    Never raises: a failed or empty generation becomes an inline
    "Analysis failed for SYMBOL: ..." message so sibling symbols are unaffected.
    """
    try:
        prompt = build_analysis_prompt(symbol, bundle, query_text)
        text = await generator.generate([ChatTurn(role="user", content=prompt)])
        if not text or not text.strip():
            raise LLMClientError("Empty analysis response")
        return text
    except Exception as e:
        logger.error(f"Analysis error for {symbol}: {e}", exc_info=True)
        return f"Analysis failed for {symbol}: {e}"
