# agents/language_agent/models.py

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """One role-tagged message sent to the text-generation model."""

    role: Literal["user", "assistant"] = "user"
    content: str


class AnalysisMode(str, Enum):
    COMPARISON = "comparison"
    RECOMMENDATION = "recommendation"
    GENERAL = "general_analysis"

    @property
    def template(self) -> str:
        return f"{self.value}.tpl"


class SymbolAnalysis(BaseModel):
    symbol: str = Field(..., min_length=1)
    analysis: str
