# concierge/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SITE_NAME = "Hello Gorgeous Med Spa"
DEFAULT_BOOKING_URL = "https://hellogorgeousmedspa.com/book"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    openai_base_url: str = DEFAULT_BASE_URL
    openai_timeout: float = 60.0
    temperature: float = 0.4
    site_name: str = DEFAULT_SITE_NAME
    booking_url: str = DEFAULT_BOOKING_URL
    log_level: str = "INFO"
    log_body_max: int = 512

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment; blank values fall back to defaults."""
        temperature = min(max(_float("CHAT_TEMPERATURE", 0.4), 0.0), 1.0)
        return cls(
            openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
            openai_model=(os.getenv("OPENAI_MODEL") or "").strip() or DEFAULT_MODEL,
            openai_base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or DEFAULT_BASE_URL,
            openai_timeout=_float("OPENAI_TIMEOUT", 60.0),
            temperature=temperature,
            site_name=(os.getenv("SITE_NAME") or "").strip() or DEFAULT_SITE_NAME,
            booking_url=(os.getenv("BOOKING_URL") or "").strip() or DEFAULT_BOOKING_URL,
            log_level=os.getenv("LOG_LEVEL", "info").upper(),
            log_body_max=_int("LOG_BODY_MAX", 512),
        )


def get_settings() -> Settings:
    # Re-read per call so deployments and tests can change the environment
    return Settings.from_env()
