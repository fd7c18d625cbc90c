"""
Centralized configuration for the menu parsing backend.

All environment variables and settings should be defined here
to avoid duplication across modules.
"""
import os
from functools import lru_cache


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # CORS - comma-separated list of allowed origins
    ALLOWED_ORIGINS: list = os.environ.get(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000"
    ).split(",")

    # Parser selection: "rules" or "llm"
    MENU_PARSER_BACKEND: str = os.environ.get("MENU_PARSER_BACKEND", "rules").strip().lower()
    MENU_PARSER_FALLBACK: bool = _env_bool("MENU_PARSER_FALLBACK", "true")

    # Optional YAML file replacing the packaged rule tables
    MENU_RULES_PATH: str = os.environ.get("MENU_RULES_PATH", "")

    # Chat-completion service (xAI Grok, OpenAI-compatible)
    XAI_API_KEY: str = os.environ.get("XAI_API_KEY", "")
    XAI_API_URL: str = os.environ.get("XAI_API_URL", "https://api.x.ai/v1/chat/completions")
    XAI_MODEL: str = os.environ.get("XAI_MODEL", "grok-3-mini")
    LLM_MAX_TOKENS: int = int(os.environ.get("LLM_MAX_TOKENS", "15000"))
    LLM_TEMPERATURE: float = float(os.environ.get("LLM_TEMPERATURE", "0.1"))
    LLM_TIMEOUT: int = int(os.environ.get("LLM_TIMEOUT", "120"))
    LLM_MAX_RETRIES: int = int(os.environ.get("LLM_MAX_RETRIES", "1"))

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
