"""
Configuration for Pantry Recipe Finder.

Environment variables are read from a .env file at the project root (if one
exists) and then from the process environment, which takes precedence.

Environment Variables:
- SPOONACULAR_API_KEY: Spoonacular credential (required for real lookups)
- SPOONACULAR_BASE_URL: Optional, defaults to "https://api.spoonacular.com"
- SPOONACULAR_RESULT_COUNT: Optional, number of recipes to request (default: 5)
- SPOONACULAR_TIMEOUT: Optional, outbound timeout in seconds (default: none)
- PORT: Optional, listening port (default: 3000)
- FLASK_ENV: Optional, "development" enables debug mode
- CORS_ORIGINS: Optional, comma-separated origins for /api/* (default: "*")
- LOG_LEVEL: Optional, defaults to "INFO"
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from app_models import ConfigError

DEFAULT_BASE_URL = "https://api.spoonacular.com"
DEFAULT_RESULT_COUNT = 5
DEFAULT_PORT = 3000


def load_env_file() -> None:
    """Load .env from the project root without overriding existing variables."""
    env_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(env_path, override=False)


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _timeout_setting(env: Mapping[str, str]) -> Optional[float]:
    raw = env.get("SPOONACULAR_TIMEOUT")
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"SPOONACULAR_TIMEOUT must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"SPOONACULAR_TIMEOUT must be positive, got {value}")
    return value


def _log_level_setting(env: Mapping[str, str]) -> str:
    level = env.get("LOG_LEVEL", "INFO").strip().upper()
    # getLevelName maps known names to ints and anything else to "Level ..."
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {level!r}")
    return level


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and passed to the app."""
    spoonacular_api_key: Optional[str] = None
    spoonacular_base_url: str = DEFAULT_BASE_URL
    result_count: int = DEFAULT_RESULT_COUNT
    request_timeout: Optional[float] = None
    port: int = DEFAULT_PORT
    debug: bool = False
    cors_origins: str = "*"
    log_level: str = "INFO"

    @property
    def spoonacular_configured(self) -> bool:
        return bool(self.spoonacular_api_key)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build Settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance

        Raises:
            ConfigError: If a numeric variable or LOG_LEVEL cannot be parsed
        """
        if env is None:
            env = os.environ

        return cls(
            spoonacular_api_key=env.get("SPOONACULAR_API_KEY") or None,
            spoonacular_base_url=(env.get("SPOONACULAR_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            result_count=_int_setting(env, "SPOONACULAR_RESULT_COUNT", DEFAULT_RESULT_COUNT),
            request_timeout=_timeout_setting(env),
            port=_int_setting(env, "PORT", DEFAULT_PORT),
            debug=env.get("FLASK_ENV", "production") == "development",
            cors_origins=env.get("CORS_ORIGINS", "*"),
            log_level=_log_level_setting(env),
        )


load_env_file()
