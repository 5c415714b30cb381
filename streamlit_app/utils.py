# streamlit_app/utils.py

import os
import logging
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

import requests
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Environment variables for URLs
CHAT_URL = os.getenv("CHAT_URL", "http://localhost:8004/api/chat")
CHAT_TIMEOUT = float(os.getenv("CHAT_TIMEOUT", "180"))  # Transcription plus several searches and generations


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    symbols: Optional[List[str]] = None
    timestamp: str = Field(default_factory=lambda: datetime.now().strftime("%H:%M:%S"))


def call_chat(audio_bytes: bytes, mime_type: str = "audio/wav", filename: str = "recording.wav") -> Dict[str, Any]:
    """
    Upload one finished recording to the chat endpoint.

    Returns the JSON body. Transport failures and non-JSON replies come back as
    {"success": False, "error": ...} so the page can show them.
    """
    files = {"audio": (filename, audio_bytes, mime_type)}
    try:
        response = requests.post(CHAT_URL, files=files, timeout=CHAT_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.error(f"Error calling chat service: {e}")
        return {"success": False, "error": "Failed to reach the analysis service.", "details": str(e)}

    try:
        return response.json()
    except ValueError:
        logger.error(f"Chat service returned non-JSON body (HTTP {response.status_code})")
        return {
            "success": False,
            "error": f"Unexpected response from the analysis service (HTTP {response.status_code}).",
            "details": response.text,
        }


def messages_from_response(data: Dict[str, Any]) -> List[ChatMessage]:
    """The chat messages to append for one endpoint reply: the transcription, then the analysis."""
    if not data.get("success"):
        return []

    messages: List[ChatMessage] = []
    transcription = (data.get("transcription") or "").strip()
    if transcription:
        messages.append(ChatMessage(role="user", content=transcription))

    analysis = (data.get("analysis") or "").strip()
    if analysis:
        messages.append(ChatMessage(role="assistant", content=analysis, symbols=data.get("symbols")))
    return messages
