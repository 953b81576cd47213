"""
Blogforge Configuration
=======================

Centralized pipeline settings.

Built once at startup and handed to the store, the content generator and the
orchestrator. Nothing below `main.py` reads the environment directly.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DuplicatePolicy = Literal["insert", "skip_seen", "skip_existing"]

REQUIRED_FIELDS = (
    "supabase_url",
    "supabase_anon_key",
    "openrouter_api_key",
    "from_table",
    "to_table",
)


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the given settings."""


class Settings(BaseSettings):
    """Pipeline settings loaded from environment / .env."""

    # App info
    app_name: str = "blogforge"
    app_version: str = "1.0.0"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    from_table: str = Field(default="", validation_alias=AliasChoices("from_table", "fromtable"))
    to_table: str = Field(default="", validation_alias=AliasChoices("to_table", "totable"))

    # OpenRouter (OpenAI-compatible)
    openrouter_api_key: str = ""
    llm_base_url: str = "https://openrouter.ai/api/v1"
    llm_model: str = "google/gemini-2.0-flash-001"
    llm_temperature: float = 0.7
    llm_top_p: float = 0.9
    llm_max_tokens: int = 800
    llm_timeout_s: float = 60.0
    prompt_max_chars: int = 1000

    # Write-back behaviour
    duplicate_policy: DuplicatePolicy = "insert"
    source_id_column: Optional[str] = None

    # Outcome trail (JSONL); disabled when unset
    outcome_log_path: Optional[Path] = None

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=3000, validation_alias=AliasChoices("api_port", "port"))
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_duplicate_policy(self) -> "Settings":
        if self.duplicate_policy == "skip_existing" and not self.source_id_column:
            raise ValueError("duplicate_policy=skip_existing requires source_id_column")
        return self

    def missing_required(self) -> list[str]:
        """Names of required settings that are empty."""
        return [name for name in REQUIRED_FIELDS if not str(getattr(self, name) or "").strip()]

    def require_complete(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: "
                + ", ".join(name.upper() for name in missing)
            )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
