from __future__ import annotations
"""server/app/core/config.py
~~~~~~~~~~~~~~~~~~~~~~~~
Paramètres (pydantic-settings).
"""

from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = "change-me"
    BACKEND_TIMEOUT_SECONDS: float = Field(10.0, gt=0)
    ANALYTICS_WINDOW_DAYS: int = Field(30, ge=1)
    SLA_CRITICAL_MINUTES: int = Field(120, ge=0)
    HOTSPOT_TOP_N: int = Field(10, ge=1)
    PREDICTION_MIN_RECURRENCE: int = Field(2, ge=1)
    PREDICTION_TOP_N: int = Field(8, ge=1)
    # "forward" : progression stricte ; "permissive" : tout statut vers tout autre (staff)
    TRANSITION_POLICY: Literal["forward", "permissive"] = "forward"
    CORS_ALLOW_ORIGINS: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

settings = Settings()
