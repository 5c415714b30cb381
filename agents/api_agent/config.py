# agents/api_agent/config.py

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional
import os
import logging

load_dotenv()


class Settings(BaseSettings):
    # SerpAPI settings
    SERPAPI_URL: str = Field(default="https://serpapi.com/search.json", description="SerpAPI search endpoint.")
    SERP_API_KEY: str = Field(default="", description="API key for SerpAPI.")

    RESULTS_PER_CATEGORY: int = Field(default=3, ge=1, le=10, description="Organic results kept per query category.")

    # Common HTTP client settings; None keeps httpx's default timeout
    TIMEOUT: Optional[float] = Field(default=None, gt=0, le=120, description="HTTP client timeout in seconds.")

    # Transport-error retries. 1 means every search is attempted exactly once.
    SEARCH_MAX_ATTEMPTS: int = Field(default=1, ge=1, le=5, description="Attempts per search on connection errors.")
    RETRY_DELAY: float = Field(default=1.0, ge=0.0, le=10.0, description="Seconds between search attempts.")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING, ERROR).")

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding='utf-8',
        extra="ignore"
    )


settings = Settings()

# Configure logging
log_level_to_set = settings.LOG_LEVEL.upper()
if not hasattr(logging, log_level_to_set):
    logging.warning(f"Invalid LOG_LEVEL '{log_level_to_set}' in API Agent settings. Defaulting to INFO.")
    log_level_to_set = "INFO"

logging.basicConfig(
    level=getattr(logging, log_level_to_set),
    format="%(asctime)s - %(name)s (API_AGENT) - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
