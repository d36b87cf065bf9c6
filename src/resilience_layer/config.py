"""
Configuration settings for the resilience layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from resilience_layer.models.enums import DEFAULT_GEMINI_FLASH_MODEL, DEFAULT_GEMINI_MODEL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Retry & Backoff ===
    RETRY_MAX_ATTEMPTS: int = 5
    RETRY_INITIAL_DELAY_MS: int = 5000
    RETRY_MAX_DELAY_MS: int = 30000

    # === Authentication ===
    AUTH_TYPE: Optional[str] = None  # e.g. "oauth-personal", "gemini-api-key"

    # === Models ===
    DEFAULT_MODEL: str = DEFAULT_GEMINI_MODEL
    FALLBACK_MODEL: str = DEFAULT_GEMINI_FLASH_MODEL

    # === Model Probe ===
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com"
    MODEL_PROBE_TIMEOUT_SECONDS: float = 2.0

    # === Development ===
    SIMULATE_429: bool = False  # Inject synthetic rate-limit errors

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
