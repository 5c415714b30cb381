# orchestrator/models.py

"""Pydantic models for the Orchestrator service."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Body returned by the /api/chat endpoint. Unset fields are left out of the JSON."""

    success: bool
    transcription: Optional[str] = None
    symbols: Optional[List[str]] = None
    analysis: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    agent: str
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    text_model: str
    audio_model: str
