"""
Application Configuration
=========================

Resolved once at startup into a frozen AppConfig and passed
explicitly to everything that needs it. Nothing reads os.environ
after load_config() returns.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv, find_dotenv

from storyteller.providers import DEFAULT_BASE_URL
from .contracts.errors import ConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_MODEL_PRIORITY: Tuple[str, ...] = (
    "gemini-2.0-pro",
    "gemini-2.0-flash",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent / "data" / "words.json"

SUPPORTED_PROVIDERS = frozenset({"gemini", "mock"})


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable process configuration.

    WHY FROZEN:
    The model chain used to be process-wide mutable state.
    Here it is a tuple fixed at startup.
    """
    gemini_api_key: Optional[str] = None
    model_priority: Tuple[str, ...] = DEFAULT_MODEL_PRIORITY
    gemini_base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    temperature: Optional[float] = None
    provider: str = "gemini"
    environment: str = "production"
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: Tuple[str, ...] = ("*",)
    static_dir: Optional[str] = None
    data_path: Path = field(default=DEFAULT_DATA_PATH)

    def __post_init__(self):
        if not self.model_priority:
            raise ConfigurationError("model_priority must contain at least one model")
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")
        if self.provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unknown provider {self.provider!r}; expected one of {sorted(SUPPORTED_PROVIDERS)}"
            )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def parse_model_priority(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma-separated model list.

    Blank input (or only separators) yields the default chain. A
    non-empty list replaces the default in full, it is not merged.
    """
    models = tuple(m.strip() for m in (raw or "").split(",") if m.strip())
    return models or DEFAULT_MODEL_PRIORITY


def _parse_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build AppConfig from the environment.

    When environ is None, a .env file found from the working directory
    is loaded first; variables already set in the process win.
    """
    if environ is None:
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(env_path, override=False)
        logger.info("Loaded .env from: %s", env_path or "[none]")
        environ = os.environ

    origins = tuple(
        o.strip() for o in environ.get("WORDMAP_CORS_ORIGINS", "*").split(",") if o.strip()
    ) or ("*",)

    config = AppConfig(
        gemini_api_key=environ.get("GEMINI_API_KEY") or None,
        model_priority=parse_model_priority(environ.get("GEMINI_MODEL_PRIORITY")),
        gemini_base_url=environ.get("GEMINI_API_BASE") or DEFAULT_BASE_URL,
        timeout_seconds=_parse_float(environ, "GEMINI_TIMEOUT_SECONDS", 30.0),
        temperature=_parse_float(environ, "GEMINI_TEMPERATURE", None),
        provider=(environ.get("WORDMAP_PROVIDER") or "gemini").strip().lower(),
        environment=(environ.get("WORDMAP_ENV") or "production").strip().lower(),
        host=environ.get("HOST") or "0.0.0.0",
        port=_parse_int(environ, "PORT", 3001),
        cors_origins=origins,
        static_dir=environ.get("WORDMAP_STATIC_DIR") or None,
        data_path=Path(environ["WORDMAP_DATA_PATH"]) if environ.get("WORDMAP_DATA_PATH") else DEFAULT_DATA_PATH,
    )

    logger.info("[Gemini] Model priority: %s", ", ".join(config.model_priority))
    if config.provider == "gemini" and not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; story generation will fail")
    return config
