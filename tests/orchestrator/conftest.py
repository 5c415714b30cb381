"""Pytest fixtures for orchestrator tests."""
import re
import pytest
from typing import Any, Dict, List, Optional
from fastapi.testclient import TestClient

from agents.api_agent.client import SearchRequestFailed, get_search_client
from agents.language_agent.llm_client import get_text_generator
from agents.language_agent.models import ChatTurn
from agents.voice_agent.models import AudioBlob
from agents.voice_agent.stt_client import EmptyTranscription, get_transcriber
from orchestrator.main import app


class FakeTranscriber:
    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.received: List[AudioBlob] = []

    async def transcribe(self, audio: AudioBlob) -> str:
        self.received.append(audio)
        if self.error is not None:
            raise self.error
        if not self.text:
            raise EmptyTranscription()
        return self.text


class FakeGenerator:
    """Answers symbol extraction with `symbols_reply` and analysis prompts per symbol."""

    def __init__(self, symbols_reply: str = "NULL", failing_symbols: tuple = ()):
        self.symbols_reply = symbols_reply
        self.failing_symbols = failing_symbols
        self.prompts: List[str] = []

    async def generate(self, messages: List[ChatTurn]) -> str:
        prompt = messages[-1].content
        self.prompts.append(prompt)
        if "extract the stock symbol" in prompt:
            return self.symbols_reply
        symbol = re.search(r"(?:Analyze|recommendation for) (\S+)", prompt).group(1)
        if symbol in self.failing_symbols:
            raise RuntimeError(f"generation failed for {symbol}")
        return f"Report for {symbol}"


class FakeSearchClient:
    """Returns one snippet per query; queries for `failing_symbols` get an HTTP error."""

    def __init__(self, failing_symbols: tuple = ()):
        self.failing_symbols = failing_symbols
        self.queries: List[str] = []

    async def search(self, query: str) -> Dict[str, Any]:
        self.queries.append(query)
        symbol = query.split(" ")[0]
        if symbol in self.failing_symbols:
            raise SearchRequestFailed(503, "Service Unavailable")
        return {"organic_results": [{"title": query, "snippet": f"{symbol} snippet"}]}


@pytest.fixture
def fakes():
    """Install fake collaborators on the app and hand them to the test for configuration."""
    doubles = {
        "transcriber": FakeTranscriber(),
        "generator": FakeGenerator(),
        "search": FakeSearchClient(),
    }
    app.dependency_overrides[get_transcriber] = lambda: doubles["transcriber"]
    app.dependency_overrides[get_text_generator] = lambda: doubles["generator"]
    app.dependency_overrides[get_search_client] = lambda: doubles["search"]
    yield doubles
    app.dependency_overrides.clear()


@pytest.fixture
def test_client():
    """Create a TestClient for the orchestrator FastAPI app."""
    return TestClient(app)


@pytest.fixture
def audio_upload():
    return {"audio": ("recording.webm", b"fake webm bytes", "audio/webm")}
