"""Application configuration utilities.

This module centralizes environment configuration for the diagnostic server:
listening address, greeting base path, the startup params source and the
timeouts applied at the process edges.

Controls:
- Do not log the inline JSON or fetched parameter values.
- Avoid crashing on missing or malformed env; provide safe defaults.

Environment variables:
- URL_BASE_PATH: Prefix used in the greeting and request log lines. Defaults to '/'.
- PORT: TCP port to listen on. Defaults to 8000 (also used when not an integer).
- HOST: Bind address. Defaults to 0.0.0.0.
- SECRET_NAME: SSM parameter name whose value is JSON text.
- SECRET_JSON: Inline JSON text, used only when SECRET_NAME is absent.
- LOG_LEVEL: Standard logging level name. Defaults to INFO.
- SECRET_FETCH_TIMEOUT: Seconds for the SSM connect/read timeout. Defaults to 10.
- GRACEFUL_SHUTDOWN_TIMEOUT: Seconds to drain in-flight requests on exit. Defaults to 10.
"""
from __future__ import annotations

import logging
import os
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

DEFAULT_PORT = 8000
DEFAULT_BASE_PATH = "/"


class Settings(BaseModel):
    """Configuration settings loaded from environment with safe defaults."""
    base_path: str = Field(
        default=DEFAULT_BASE_PATH, description="Base path shown in the greeting text."
    )
    host: str = Field(default="0.0.0.0", description="Bind address.")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, description="TCP port to listen on.")
    secret_name: Optional[str] = Field(
        default=None, description="SSM parameter holding the startup params JSON."
    )
    secret_json: Optional[str] = Field(
        default=None, description="Inline startup params JSON (used if secret_name is unset)."
    )
    log_level: str = Field(default="INFO", description="Root log level name.")
    secret_fetch_timeout: float = Field(
        default=10.0, gt=0, description="SSM connect/read timeout in seconds."
    )
    graceful_shutdown_timeout: float = Field(
        default=10.0, ge=0, description="Seconds to wait for in-flight requests on shutdown."
    )


def _env_or_none(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _log_level_env() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"  # unknown names would make logging.setLevel raise
    return level


def load_settings() -> Settings:
    """Load settings from environment with robust defaults and validation.

    Returns:
        Settings: Validated settings object.

    Raises:
        ValidationError: If environment values are invalid.
    """
    port = _int_env("PORT", DEFAULT_PORT)
    if not 0 < port <= 65535:
        port = DEFAULT_PORT

    try:
        settings = Settings(
            base_path=os.getenv("URL_BASE_PATH") or DEFAULT_BASE_PATH,
            host=os.getenv("HOST") or "0.0.0.0",
            port=port,
            secret_name=_env_or_none("SECRET_NAME"),
            secret_json=_env_or_none("SECRET_JSON"),
            log_level=_log_level_env(),
            secret_fetch_timeout=_float_env("SECRET_FETCH_TIMEOUT", 10.0),
            graceful_shutdown_timeout=_float_env("GRACEFUL_SHUTDOWN_TIMEOUT", 10.0),
        )
    except ValidationError as ve:
        # Keep error generic to avoid leaking values
        raise ve
    return settings


# Singleton-style accessor
_settings: Optional[Settings] = None

# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Get cached application settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings

# PUBLIC_INTERFACE
def reset_settings_cache() -> None:
    """Reset the cached settings.

    This is primarily intended for tests to ensure that changes to environment
    variables (e.g., PORT, SECRET_JSON) take effect on subsequent calls
    to get_settings().
    """
    global _settings
    _settings = None
