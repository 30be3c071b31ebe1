"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "C-Force Intel Core"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_progress_timings(self) -> "Settings":
        for field_name in ("progress_interval", "progress_reset_delay"):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        if not 0 <= self.progress_start <= self.progress_cap < 100:
            raise ValueError(
                "progress values must satisfy 0 <= progress_start <= progress_cap < 100, "
                f"got start={self.progress_start} cap={self.progress_cap}"
            )
        if self.progress_max_step < 1:
            raise ValueError(f"progress_max_step must be >= 1, got {self.progress_max_step}")
        return self

    # Gemini
    gemini_api_key: str | None = None

    # Intelligence pipelines (scan, OSINT, IP trace)
    pipeline_model: str = "gemini-3-flash-preview"
    pipeline_thinking_budget: int = 0
    pipeline_web_search: bool = True

    # Assistant
    assistant_model: str = "gemini-3-flash-preview"
    assistant_temperature: float = 0.7
    assistant_top_p: float = 0.95
    assistant_thinking_budget: int = 0

    # Run log
    log_max_entries: int = 50

    # Synthetic progress
    progress_start: int = 15
    progress_cap: int = 98
    progress_max_step: int = 20
    progress_interval: float = 0.8
    progress_reset_delay: float = 0.3

    # CORS
    allowed_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
