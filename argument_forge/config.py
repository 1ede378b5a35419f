"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Oracle timeout and expansion cap are strictly positive

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Oracle call timeout is minutes-scale: a single structured answer over a large
      graph document can take several minutes
    - expansion_max_nodes bounds the breadth-first rebuttal expansion (see
      services/expand_rebuttal.py)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str = "sk-ant-placeholder"
    anthropic_max_retries: int = 3
    anthropic_timeout_seconds: int = 300
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 60_000

    # Oracle
    oracle_model: str = "claude-sonnet-4-5"
    oracle_max_tokens: int = 16_000
    oracle_call_timeout_seconds: float = 600.0

    # Expansion
    expansion_max_nodes: int = 64

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("oracle_call_timeout_seconds", "expansion_max_nodes")
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
