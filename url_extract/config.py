"""
Runtime configuration for URL extraction.

Values come from the environment (a local .env file is loaded first):
    URL_EXTRACT_LOG_LEVEL=INFO
    URL_EXTRACT_MAX_TEXT_LENGTH=0          # 0 disables the input length guard
    URL_EXTRACT_STRIP_ARGUMENTS=false      # default for CLI and HTTP API
    URL_EXTRACT_OUTPUT_DIR=cache/reports
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Ensure .env is loaded
load_dotenv()

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """URL extraction settings."""
    log_level: str = "INFO"
    max_text_length: int = 0
    strip_arguments: bool = False
    output_dir: str = os.path.join("cache", "reports")

    @property
    def guard_enabled(self) -> bool:
        return self.max_text_length > 0


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in TRUE_VALUES


def get_log_level() -> str:
    """Configured log level name. Never raises, unlike get_settings."""
    return os.getenv("URL_EXTRACT_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_settings() -> Settings:
    """
    Build settings from the current environment.

    Read on every call so tests and long-running processes see changes
    without a restart.

    Raises:
        ValueError: If a numeric variable is not a non-negative integer.
    """
    return Settings(
        log_level=get_log_level(),
        max_text_length=_get_int("URL_EXTRACT_MAX_TEXT_LENGTH", 0),
        strip_arguments=_get_bool("URL_EXTRACT_STRIP_ARGUMENTS", False),
        output_dir=os.getenv("URL_EXTRACT_OUTPUT_DIR", "").strip() or os.path.join("cache", "reports"),
    )
