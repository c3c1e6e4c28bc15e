"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Champion catalog (empty knowledge_dir = repo-root knowledge/)
    knowledge_dir: str = ""
    champions_file: str = "champions.json"

    # Composition rule set: "full" adds the poke/siege strength
    composition_profile: Literal["full", "compact"] = "full"

    # LLM Provider (any OpenAI-compatible chat completions API)
    llm_api_key: str = ""
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o-mini"
    llm_timeout: float = 15.0

    # Sessions
    session_ttl_seconds: int = 60 * 60
    session_cleanup_interval_seconds: int = 60

    # Feature flags
    enable_llm: bool = True

    @computed_field
    @property
    def llm_enabled(self) -> bool:
        """LLM features need both the flag and a key."""
        return self.enable_llm and bool(self.llm_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
