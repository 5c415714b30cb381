# orchestrator/pipeline.py

"""Per-symbol fan-out and response combination."""
import asyncio
import logging
from typing import List, Sequence

from agents.api_agent.client import SearchClient, fetch_stock_data
from agents.language_agent.analyst import analyze_stock_data
from agents.language_agent.llm_client import TextGenerator
from agents.language_agent.models import SymbolAnalysis

logger = logging.getLogger(__name__)

NO_SYMBOLS_MESSAGE = (
    "I couldn't identify any stock symbols. "
    "Please mention specific companies or stocks you'd like to analyze."
)


async def analyze_symbol(
    symbol: str, query_text: str, search_client: SearchClient, generator: TextGenerator
) -> SymbolAnalysis:
    """Fetch and analyze one symbol. Any failure is turned into that symbol's analysis text."""
    try:
        bundle = await fetch_stock_data(symbol, search_client)
        analysis = await analyze_stock_data(symbol, bundle, query_text, generator)
    except Exception as e:
        logger.error(f"Error analyzing {symbol}: {e}", exc_info=True)
        analysis = f"Unable to analyze {symbol}: {e}"
    return SymbolAnalysis(symbol=symbol, analysis=analysis)


async def analyze_symbols(
    symbols: Sequence[str], query_text: str, search_client: SearchClient, generator: TextGenerator
) -> List[SymbolAnalysis]:
    """Run every symbol concurrently; results keep the order of `symbols`."""
    results = await asyncio.gather(
        *(analyze_symbol(symbol, query_text, search_client, generator) for symbol in symbols)
    )
    return list(results)


def combine_analyses(results: Sequence[SymbolAnalysis]) -> str:
    if not results:
        return ""
    if len(results) == 1:
        return results[0].analysis
    return "\n\n".join(f"{r.symbol}:\n{r.analysis}" for r in results)
