import google.generativeai as genai
from .config import settings
from .models import ChatTurn
import asyncio
import logging
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class LLMClientError(Exception):
    """Exception raised for errors in the LLM client."""
    pass


class TextGenerator(Protocol):
    async def generate(self, messages: List[ChatTurn]) -> str:
        ...


# Gemini calls the assistant side of a conversation "model"
_GEMINI_ROLES = {"user": "user", "assistant": "model"}


def to_gemini_contents(messages: List[ChatTurn]) -> List[dict]:
    return [{"role": _GEMINI_ROLES[m.role], "parts": [m.content]} for m in messages]


class GeminiTextGenerator:
    """Text generation through Google Gemini."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.model_name = model_name or settings.GEMINI_MODEL
        genai.configure(api_key=api_key or settings.GEMINI_API_KEY)

    async def generate(self, messages: List[ChatTurn]) -> str:
        """
        Generate a reply to a role-tagged message list.

        Args:
            messages: Conversation to send, oldest first

        Returns:
            The generated text, or an empty string when the model produced none

        Raises:
            LLMClientError: If there's an error in generating text
        """
        try:
            model = genai.GenerativeModel(self.model_name)
            call = model.generate_content_async(
                to_gemini_contents(messages),
                generation_config=settings.generation_config() or None,
            )
            if settings.TIMEOUT:
                response = await asyncio.wait_for(call, timeout=settings.TIMEOUT)
            else:
                response = await call
        except asyncio.TimeoutError:
            raise LLMClientError(f"Request timed out after {settings.TIMEOUT} seconds")
        except Exception as e:
            raise LLMClientError(f"Error generating text: {str(e)}") from e

        try:
            return response.text or ""
        except ValueError:
            # Blocked or empty candidates carry no text parts
            logger.warning(f"{self.model_name} returned no text parts")
            return ""

    async def generate_text(self, prompt: str) -> str:
        """Send a single user prompt."""
        return await self.generate([ChatTurn(role="user", content=prompt)])


_generator: Optional[GeminiTextGenerator] = None


def get_text_generator() -> GeminiTextGenerator:
    global _generator
    if _generator is None:
        _generator = GeminiTextGenerator()
    return _generator
