"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for the org service settings.
- Load and validate environment variables from `.env` or OS environment.

Core Workflow:
1. Build one Supabase client from SUPABASE_URL + key
2. Route org mutations through the configured dispatch convention
3. Normalize every response into a {data, error} envelope

This module does NOT:
- Create the Supabase client (see core/backend.py).
- Make external API calls.
"""

from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/orgservice/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent
_BACKEND_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # pydantic will look in CWD
    _ENV_FILE_PATH = ".env"

DISPATCH_MODES = ("server_function", "per_action")


class Settings(BaseSettings):
    """
    Settings container for the org data-access service.
    """
    # Supabase project
    SUPABASE_URL: str = Field(
        "",
        description="Supabase project URL",
    )
    SUPABASE_ANON_KEY: str = Field(
        "",
        description="Supabase anon (public) key used when no service role key is configured",
    )
    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        "",
        description="Supabase service role key for admin access (takes precedence over the anon key)",
    )

    # Edge function dispatch
    ORG_DISPATCH_MODE: str = Field(
        "server_function",
        description="'server_function' (single dispatcher) or 'per_action' (one edge function per action, deprecated)",
    )
    SERVER_FUNCTION_NAME: str = Field(
        "server_function",
        description="Name of the unified edge function that receives {action, payload}",
    )

    # Runtime
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level",
    )
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )

    @field_validator("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY", mode="before")
    @classmethod
    def strip_secrets(cls, v: Any) -> str:
        """Strip whitespace from URL and keys."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("ORG_DISPATCH_MODE", mode="before")
    @classmethod
    def check_dispatch_mode(cls, v: Any) -> str:
        mode = str(v or "server_function").strip().lower()
        if mode not in DISPATCH_MODES:
            raise ValueError(f"ORG_DISPATCH_MODE must be one of {DISPATCH_MODES}, got {v!r}")
        return mode

    @property
    def supabase_key(self) -> str:
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton pattern — settings imported anywhere will reference same object.
settings = Settings()
