"""
Configuration loader for the zips catalog.

Loads application settings from environment variables (.env file).
MongoDB connection settings live in src.common.repositories.config.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    """Read an integer setting, falling back to the default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """
    Centralized configuration for the web application.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")  # simple | json
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"

    # ===== Flask =====
    FLASK_SECRET_KEY: str = os.getenv("FLASK_SECRET_KEY", "")

    # ===== Pagination =====
    DEFAULT_PER_PAGE: int = _int_from_env("DEFAULT_PER_PAGE", 30)
    MAX_PER_PAGE: int = _int_from_env("MAX_PER_PAGE", 100)

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values.
        Raises ValueError if a setting is unusable.
        """
        if cls.LOG_FORMAT not in ("simple", "json"):
            raise ValueError(
                f"Invalid LOG_FORMAT '{cls.LOG_FORMAT}'. Must be 'simple' or 'json'."
            )
        if cls.DEFAULT_PER_PAGE < 1:
            raise ValueError(
                f"DEFAULT_PER_PAGE must be >= 1, got {cls.DEFAULT_PER_PAGE}"
            )
        if cls.MAX_PER_PAGE < cls.DEFAULT_PER_PAGE:
            raise ValueError(
                f"MAX_PER_PAGE ({cls.MAX_PER_PAGE}) must be >= DEFAULT_PER_PAGE ({cls.DEFAULT_PER_PAGE})"
            )

    @classmethod
    def summary(cls) -> dict:
        """Non-secret settings, for startup logging."""
        return {
            "log_level": cls.LOG_LEVEL,
            "log_format": cls.LOG_FORMAT,
            "debug_mode": cls.DEBUG_MODE,
            "default_per_page": cls.DEFAULT_PER_PAGE,
            "max_per_page": cls.MAX_PER_PAGE,
        }
