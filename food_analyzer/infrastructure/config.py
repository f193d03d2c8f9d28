"""Configuration utilities for infrastructure layer.

Endpoints and credentials come from environment variables (a ``.env``
file is loaded by the entry points). Nothing here talks to the network.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from food_analyzer.domain.shared.errors import ConfigurationError

DEFAULT_RECOGNITION_BASE_URL = "https://genai.hkbu.edu.hk/api/v0/rest"
DEFAULT_RECOGNITION_MODEL = "gpt-4.1"
DEFAULT_RECOGNITION_API_VERSION = "2024-12-01-preview"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _get_int(name: str, default: int) -> int:
    value = _get_float(name, float(default))
    if value != int(value):
        raise ConfigurationError(f"{name} must be an integer, got {value}")
    return int(value)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the analyzer."""

    recognition_base_url: str = DEFAULT_RECOGNITION_BASE_URL
    recognition_model: str = DEFAULT_RECOGNITION_MODEL
    recognition_api_version: str = DEFAULT_RECOGNITION_API_VERSION
    recognition_api_key: Optional[str] = None
    recognition_timeout_s: float = 30.0

    edamam_app_id: Optional[str] = None
    edamam_app_key: Optional[str] = None
    edamam_timeout_s: float = 10.0

    lookup_concurrency: int = 8
    jpeg_quality: int = 85
    ledger_path: Optional[Path] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not 1 <= self.jpeg_quality <= 100:
            raise ConfigurationError(f"JPEG_QUALITY must be 1-100, got {self.jpeg_quality}")
        if self.lookup_concurrency < 1:
            raise ConfigurationError(
                f"LOOKUP_CONCURRENCY must be >= 1, got {self.lookup_concurrency}"
            )
        if self.recognition_timeout_s <= 0 or self.edamam_timeout_s <= 0:
            raise ConfigurationError("Timeouts must be positive")

    def require_recognition_key(self) -> str:
        if not self.recognition_api_key:
            raise ConfigurationError("RECOGNITION_API_KEY is not set")
        return self.recognition_api_key

    def require_edamam_credentials(self) -> tuple[str, str]:
        if not self.edamam_app_id or not self.edamam_app_key:
            raise ConfigurationError("EDAMAM_APP_ID and EDAMAM_APP_KEY must be set")
        return self.edamam_app_id, self.edamam_app_key


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Returns:
        Settings with defaults for every unset variable

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    ledger_path = os.getenv("LEDGER_PATH")
    return Settings(
        recognition_base_url=os.getenv("RECOGNITION_BASE_URL", DEFAULT_RECOGNITION_BASE_URL),
        recognition_model=os.getenv("RECOGNITION_MODEL", DEFAULT_RECOGNITION_MODEL),
        recognition_api_version=os.getenv(
            "RECOGNITION_API_VERSION", DEFAULT_RECOGNITION_API_VERSION
        ),
        recognition_api_key=os.getenv("RECOGNITION_API_KEY") or None,
        recognition_timeout_s=_get_float("RECOGNITION_TIMEOUT_S", 30.0),
        edamam_app_id=os.getenv("EDAMAM_APP_ID") or None,
        edamam_app_key=os.getenv("EDAMAM_APP_KEY") or None,
        edamam_timeout_s=_get_float("EDAMAM_TIMEOUT_S", 10.0),
        lookup_concurrency=_get_int("LOOKUP_CONCURRENCY", 8),
        jpeg_quality=_get_int("JPEG_QUALITY", 85),
        ledger_path=Path(ledger_path) if ledger_path else None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Basic logging configuration shared by the CLI and the API."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
