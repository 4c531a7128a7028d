"""Pydantic Settings — typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from config.llm_config import LLMConfig


class Settings(BaseSettings):
    """Application configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    service_port: int = 3001
    cors_origins: list[str] = ["*"]
    debug: bool = False

    # ── LLM ──────────────────────────────────────────────────
    default_model: str = "openai/gpt-4o"
    indy_model: str = "openai/gpt-4-0613"  # Function-calling dispatcher
    fast_model: str = "openai/gpt-4o"  # Block create/update generation
    complex_model: str = "openai/gpt-4-turbo"  # Page-level planning
    max_tokens: int = 1000
    temperature: float | None = 0.7
    top_p: float | None = None
    seed: int | None = None
    llm_request_timeout: float = 30.0  # seconds, per model call

    # Provider API keys (read by LiteLLM automatically via env)
    openai_api_key: str = ""
    openai_base_url: str = ""
    anthropic_api_key: str = ""

    # ── CMS backend (persistence) ────────────────────────────
    cms_base_url: str = "http://localhost:3001"
    cms_api_prefix: str = "/api/cms"
    cms_timeout: int = 15  # seconds

    # ── Indy HTTP API (used by run_indy_action) ──────────────
    indy_api_base_url: str = "http://localhost:3001"

    # ── Block store sessions ─────────────────────────────────
    block_store_ttl: int = 3600  # seconds

    # ── Helpers ───────────────────────────────────────────────

    def get_default_llm_config(self) -> LLMConfig:
        """Build an :class:`LLMConfig` from global .env defaults."""
        return LLMConfig(
            model=self.default_model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            seed=self.seed,
        )

    @property
    def is_openai_configured(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
