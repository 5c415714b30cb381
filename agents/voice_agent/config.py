# agents/voice_agent/config.py

import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    # None leaves the SDK's own request timeout in place
    TIMEOUT: Optional[float] = Field(default=None, gt=0, description="Seconds to wait for a transcription.")

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_AUDIO_MODEL: str = "gemini-1.5-flash"
    TRANSCRIPTION_INSTRUCTION: str = (
        "Transcribe this audio query about stocks accurately, "
        "preserving any comparison or recommendation requests."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

# Configure logging
log_level_to_set = settings.LOG_LEVEL.upper()
if not hasattr(logging, log_level_to_set):
    logging.warning(f"Invalid LOG_LEVEL '{log_level_to_set}' in Voice Agent settings. Defaulting to INFO.")
    log_level_to_set = "INFO"

logging.basicConfig(
    level=getattr(logging, log_level_to_set),
    format="%(asctime)s - %(name)s (VOICE_AGENT) - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
