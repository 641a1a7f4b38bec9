# config.py
import os
from typing import Optional

from pydantic import BaseModel

import hub.env  # noqa: F401  loads .env before the defaults below are read

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"


def _env_bool(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or "").lower() in ("1", "true", "yes", "y", "on")


class Settings(BaseModel):
    env: str = os.getenv("ENV", "dev")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./hub.db")
    # Missing key is not fatal at boot; every AI request answers 500 instead.
    ai_api_key: Optional[str] = os.getenv("LOVABLE_API_KEY") or None
    ai_gateway_url: str = os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL)
    ai_model: str = os.getenv("AI_MODEL", DEFAULT_MODEL)
    gateway_timeout_secs: float = float(os.getenv("GATEWAY_TIMEOUT_SECS", "90"))
    habit_analysis_enabled: bool = _env_bool("HABIT_ANALYSIS_ENABLED")
    habit_analysis_cron: str = os.getenv("HABIT_ANALYSIS_CRON", "0 6 * * *")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))


settings = Settings()
