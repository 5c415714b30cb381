import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from agents.voice_agent.models import AudioBlob


@pytest.fixture
def sample_blob():
    """A small fake webm recording."""
    return AudioBlob(data=b"mock audio content", mime_type="audio/webm")


@pytest.fixture
def mock_gemini_model():
    """
    Patch genai so no real configuration or network call happens.
    Yields the mocked GenerativeModel instance.
    """
    mock_model = MagicMock()
    mock_model.generate_content_async = AsyncMock()
    with patch("agents.voice_agent.stt_client.genai.configure") as configure, \
         patch("agents.voice_agent.stt_client.genai.GenerativeModel", return_value=mock_model):
        mock_model.configure = configure
        yield mock_model
