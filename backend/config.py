"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No orchestration logic
- No behavioral constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import BASE_LANGUAGE, RECOGNITION_LOCALE_DEFAULT


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) == "1"


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the gateway for each session.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = "dev"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    # ------------------------------------------------------------------
    # Voice navigation
    # ------------------------------------------------------------------

    recognition_locale: str = RECOGNITION_LOCALE_DEFAULT
    default_language: str = BASE_LANGUAGE
    filler_matching: str = "substring"

    # ------------------------------------------------------------------
    # LLM intent fallback
    # ------------------------------------------------------------------

    intent_fallback: bool = False
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    openai_api_key: str | None = None
    groq_api_key: str | None = None

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    cors_origins: tuple[str, ...] = ("*",)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """Load configuration from environment variables."""
        cors = os.environ.get("CORS_ORIGINS", "*")
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            enable_json_logs=_flag("ENABLE_JSON_LOGS", "1"),

            recognition_locale=os.environ.get(
                "RECOGNITION_LOCALE", RECOGNITION_LOCALE_DEFAULT
            ),
            default_language=os.environ.get("DEFAULT_LANGUAGE", BASE_LANGUAGE),
            filler_matching=os.environ.get("FILLER_MATCHING", "substring"),

            intent_fallback=_flag("INTENT_FALLBACK", "0"),
            llm_provider=os.environ.get("LLM_PROVIDER", "openai"),
            llm_model=os.environ.get("LLM_MODEL", "gpt-4o-mini"),
            openai_api_key=os.environ.get("OPENAI_API_KEY"),
            groq_api_key=os.environ.get("GROQ_API_KEY"),

            cors_origins=tuple(
                origin.strip() for origin in cors.split(",") if origin.strip()
            ) or ("*",),
        )

    @property
    def llm_api_key(self) -> str | None:
        """API key for the selected LLM provider."""
        if self.llm_provider.lower() == "groq":
            return self.groq_api_key
        return self.openai_api_key
