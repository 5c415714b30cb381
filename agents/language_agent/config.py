# agents/language_agent/config.py

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional
import logging

load_dotenv()


class Settings(BaseSettings):
    TIMEOUT: Optional[float] = Field(default=None, gt=0, description="Seconds to wait for a generation; None keeps SDK defaults.")
    LOG_LEVEL: str = "INFO"

    # Generation overrides; unset values leave the model defaults in place
    MAX_TOKENS: Optional[int] = Field(default=None, ge=1)
    TEMPERATURE: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    TOP_P: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    TOP_K: Optional[int] = Field(default=None, ge=1)

    TEMPLATES_DIR: str = "prompts"  # Relative to this package

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-pro-latest"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def generation_config(self) -> dict:
        """Keyword arguments for the Gemini generation_config, skipping unset values."""
        config = {
            "max_output_tokens": self.MAX_TOKENS,
            "temperature": self.TEMPERATURE,
            "top_p": self.TOP_P,
            "top_k": self.TOP_K,
        }
        return {k: v for k, v in config.items() if v is not None}


settings = Settings()

# Configure logging
log_level_to_set = settings.LOG_LEVEL.upper()
if not hasattr(logging, log_level_to_set):
    temp_logger = logging.getLogger(__name__)
    temp_logger.warning(f"Invalid LOG_LEVEL '{log_level_to_set}' in Language Agent settings. Defaulting to INFO.")
    log_level_to_set = "INFO"

logging.basicConfig(
    level=getattr(logging, log_level_to_set),
    format="%(asctime)s - %(name)s (LANG_AGENT) - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
