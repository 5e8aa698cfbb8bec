"""Runtime configuration loaded from the environment or a .env file."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """reportpack settings.

    Every field can be overridden with a ``REPORTPACK_``-prefixed environment
    variable, e.g. ``REPORTPACK_MAX_CHUNK_SIZE=1200``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPORTPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Chunking
    MAX_CHUNK_SIZE: int = Field(default=1500, ge=100, le=20000)
    CHUNK_OVERLAP: int = Field(default=200, ge=0)

    # Uploads
    MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024, ge=1)
    STORE_CAPACITY: int = Field(default=10, ge=1)

    # LLM (Gemini REST API)
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_VISION_MODEL: str = "gemini-2.0-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    LLM_MAX_RETRIES: int = Field(default=2, ge=1, le=5)
    LLM_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0)

    # Vision metrics extraction
    VISION_PAGES: int = Field(default=1, ge=1, le=5)
    VISION_DPI: int = Field(default=150, ge=72, le=300)

    # Retrieval
    EMBEDDING_MODEL: str = "all-MiniLM-L6-v2"

    @model_validator(mode="after")
    def validate_overlap(self):
        """Overlap must leave room for the window to advance."""
        if self.CHUNK_OVERLAP >= self.MAX_CHUNK_SIZE:
            raise ValueError(
                f"CHUNK_OVERLAP ({self.CHUNK_OVERLAP}) must be smaller than "
                f"MAX_CHUNK_SIZE ({self.MAX_CHUNK_SIZE})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
