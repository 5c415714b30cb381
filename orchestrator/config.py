# orchestrator/config.py

"""Configuration for the FinVoice orchestrator service."""
import os
import logging
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Settings for the orchestrator. The agent packages read their own keys."""

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8004"))
    RELOAD: bool = os.getenv("RELOAD", "False").lower() == "true"  # uvicorn autoreload for `python -m orchestrator.main`

    # The Streamlit client posts recordings from here
    CORS_ORIGINS: List[str] = ["http://localhost:8501"]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()

log_level_to_set = settings.LOG_LEVEL
if not hasattr(logging, log_level_to_set):
    logging.warning(f"Invalid LOG_LEVEL '{log_level_to_set}' in settings. Defaulting to INFO.")
    log_level_to_set = "INFO"

logging.basicConfig(
    level=getattr(logging, log_level_to_set),
    format="%(asctime)s - %(name)s (ORCHESTRATOR) - %(levelname)s - %(message)s"
)
