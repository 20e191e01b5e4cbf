from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Keyword overrides are
    accepted so tests and embedding code can build an isolated instance.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    api_choice: str = os.getenv("API_CHOICE", "OPENAI")

    groq_api_key: Optional[str] = os.getenv("GROQ_API_KEY") or None
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    hf_api_key: Optional[str] = os.getenv("HF_API_KEY") or None

    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    groq_model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    # Groq runs slightly more creative than OpenAI for the same persona
    groq_temperature: float = float(os.getenv("GROQ_TEMPERATURE", "0.8"))
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))
    max_tokens: int = int(os.getenv("MAX_TOKENS", "300"))
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    session_window: int = int(os.getenv("SESSION_WINDOW", "10"))
    port: int = int(os.getenv("PORT", "3000"))

    def __init__(self, **overrides: Any) -> None:
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
