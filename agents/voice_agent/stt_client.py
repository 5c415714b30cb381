"""Speech-to-Text client for the Voice Agent."""
import asyncio
import logging
import time
from typing import Optional, Protocol

import google.generativeai as genai

from agents.voice_agent.config import settings
from agents.voice_agent.models import AudioBlob

logger = logging.getLogger(__name__)


class STTClientError(Exception):
    """Exception raised by the STT client."""

    pass


class EmptyTranscription(STTClientError):
    """Raised when the model answers without any transcribed text."""

    def __init__(self, message: str = "Failed to transcribe audio"):
        super().__init__(message)


class Transcriber(Protocol):
    async def transcribe(self, audio: AudioBlob) -> str:
        ...


def _response_text(response) -> str:
    # .text raises ValueError when the candidate carries no text parts
    try:
        return response.text or ""
    except ValueError:
        return ""


class GeminiTranscriber:
    """Transcribes recorded queries with a multimodal Gemini model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        instruction: Optional[str] = None,
    ):
        self.model_name = model_name or settings.GEMINI_AUDIO_MODEL
        self.instruction = instruction or settings.TRANSCRIPTION_INSTRUCTION
        genai.configure(api_key=api_key or settings.GEMINI_API_KEY)

    def build_contents(self, audio: AudioBlob) -> list:
        """Instruction text followed by the inline audio part.

        The SDK base64-encodes inline bytes when it serializes the request.
        """
        return [
            {
                "role": "user",
                "parts": [
                    self.instruction,
                    {"mime_type": audio.mime_type, "data": audio.data},
                ],
            }
        ]

    async def transcribe(self, audio: AudioBlob) -> str:
        """
        Transcribe one recording.

        Args:
            audio: The uploaded recording.

        Returns:
            The transcribed query text.

        Raises:
            EmptyTranscription: If the model returned no text.
            STTClientError: If the model call failed.
        """
        start = time.perf_counter()
        try:
            model = genai.GenerativeModel(self.model_name)
            call = model.generate_content_async(self.build_contents(audio))
            if settings.TIMEOUT:
                response = await asyncio.wait_for(call, timeout=settings.TIMEOUT)
            else:
                response = await call
        except asyncio.TimeoutError as e:
            raise STTClientError(f"Transcription timed out after {settings.TIMEOUT} seconds") from e
        except Exception as e:
            raise STTClientError(f"Error transcribing audio: {str(e)}") from e

        text = _response_text(response).strip()
        if not text:
            raise EmptyTranscription()

        logger.info(
            f"Transcribed {audio.size} bytes of {audio.mime_type} with {self.model_name} "
            f"in {time.perf_counter() - start:.2f}s"
        )
        return text


_transcriber: Optional[GeminiTranscriber] = None


def get_transcriber() -> GeminiTranscriber:
    """Return the process-wide transcriber, creating it on first use."""
    global _transcriber
    if _transcriber is None:
        _transcriber = GeminiTranscriber()
    return _transcriber
