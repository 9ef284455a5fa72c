from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Settings loaded from ``TEXTBAYES_*`` environment variables.

    A ``.env`` file in the working directory is honoured. Every field is
    read when the instance is created, so tests can patch the environment.
    """

    # Logging
    log_level: str = field(default_factory=lambda: _env("TEXTBAYES_LOG_LEVEL", "WARNING").upper())
    log_format: str = field(default_factory=lambda: _env("TEXTBAYES_LOG_FORMAT", "text").lower())  # text | json
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("TEXTBAYES_LOG_FILE"))

    # CLI defaults
    model_path: str = field(default_factory=lambda: _env("TEXTBAYES_MODEL_PATH", "model.json"))
    threshold: float = field(default_factory=lambda: _float_env("TEXTBAYES_THRESHOLD", 0.3))
    top_k: int = field(default_factory=lambda: _int_env("TEXTBAYES_TOP_K", 3))


def get_settings() -> Settings:
    """Return current settings snapshot.

    Re-evaluates the environment on each call.
    """
    return Settings()
