# agents/voice_agent/models.py

from pydantic import BaseModel, Field, field_validator


class AudioBlob(BaseModel):
    """A finished recording as uploaded by the client."""

    data: bytes = Field(..., repr=False, description="Raw audio bytes")
    mime_type: str = Field(..., description="Declared content type, e.g. 'audio/webm'")

    @field_validator("mime_type")
    @classmethod
    def mime_type_must_be_audio(cls, v: str) -> str:
        if not v.startswith("audio/"):
            raise ValueError(f"'{v}' is not an audio content type")
        return v

    @property
    def size(self) -> int:
        return len(self.data)
