# agents/language_agent/extractor.py

"""Ticker symbol extraction from a transcribed query."""
import logging
from typing import List

from .llm_client import LLMClientError, TextGenerator
from .models import ChatTurn
from .templates import render_prompt

logger = logging.getLogger(__name__)

NO_SYMBOLS_TOKEN = "NULL"


class SymbolExtractionFailed(LLMClientError):
    """Raised when the model call for symbol extraction fails or returns nothing."""
    pass


def build_extraction_prompt(text: str) -> str:
    return render_prompt("symbol_extraction.tpl", text=text)


def parse_symbols(reply: str) -> List[str]:
    """
    Turn the model's reply into a symbol list.

    The reply is trimmed and upper-cased; the NULL token means no symbols.
    Any other reply is trusted and split on commas.
    """
    symbols_str = reply.strip().upper()
    if symbols_str == NO_SYMBOLS_TOKEN:
        return []
    return [s.strip() for s in symbols_str.split(",") if s.strip()]


async def extract_symbols(text: str, generator: TextGenerator) -> List[str]:
    """
    Ask the model for the ticker symbols mentioned in `text`.

    Raises:
        SymbolExtractionFailed: wrapping whatever went wrong with the model call.
    """
    try:
        reply = await generator.generate([ChatTurn(role="user", content=build_extraction_prompt(text))])
        if not reply or not reply.strip():
            raise LLMClientError("Empty response from symbol extraction")
    except Exception as e:
        logger.error(f"Symbol extraction error: {e}")
        raise SymbolExtractionFailed(f"Symbol extraction failed: {e}") from e

    symbols = parse_symbols(reply)
    logger.info(f"Extracted symbols {symbols} from query")
    return symbols
