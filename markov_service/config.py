"""
Markov Service Configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="markov-service")
    SERVICE_VERSION: str = Field(default="1.0.0")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    LOG_LEVEL: str = Field(default="info")
    DEBUG: bool = Field(default=False)

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"]
    )

    # ===== Markov Engine Defaults =====
    MARKOV_ORDER: int = Field(default=2, ge=1)
    MARKOV_CASE_SENSITIVE: bool = Field(default=False)
    MARKOV_PRESERVE_WHITESPACE: bool = Field(default=True)
    MARKOV_SENTENCE_ENDERS: List[str] = Field(default=[".", "!", "?"])
    MARKOV_MAX_GENERATION_LENGTH: int = Field(default=1000, ge=1)
    MARKOV_MIN_PROBABILITY: float = Field(default=0.0, ge=0.0, le=1.0)
    MARKOV_SEED: Optional[int] = Field(default=None)

    # ===== Model Files =====
    MARKOV_MODEL_DIR: str = Field(default="./models/markov")
    MARKOV_PRELOAD_PATH: Optional[str] = Field(default=None)

    # >>> pydantic v2 settings config <<<
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
