import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

A2A_MODES = ("webhook", "sync")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = None
    azure_openai_api_key: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_api_version: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    classifier_api_key: Optional[str] = None
    classifier_model: str = "gpt-4o-mini"

    tmdb_api_key: Optional[str] = None
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    http_timeout: Optional[float] = None

    a2a_mode: str = "webhook"
    worker_count: int = 4
    agent_max_steps: int = 5
    mood_cache_ttl_ms: int = 1800000
    mood_cache_capacity: int = 1

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        mode = os.getenv("A2A_MODE", "webhook").strip().lower()
        if mode not in A2A_MODES:
            raise ConfigurationError(f"A2A_MODE must be one of {', '.join(A2A_MODES)}, got '{mode}'")

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            azure_openai_api_key=os.getenv("AZURE_OPENAI_API_KEY") or None,
            azure_openai_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT") or None,
            azure_openai_api_version=os.getenv("AZURE_OPENAI_API_VERSION") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            classifier_api_key=os.getenv("CLASSIFIER_API_KEY") or os.getenv("OPENAI_API_KEY") or None,
            classifier_model=os.getenv("CLASSIFIER_MODEL", "gpt-4o-mini"),
            tmdb_api_key=os.getenv("TMDB_API_KEY") or None,
            tmdb_base_url=os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3"),
            http_timeout=_get_float("HTTP_TIMEOUT_SECONDS"),
            a2a_mode=mode,
            worker_count=_get_int("A2A_WORKER_COUNT", 4),
            agent_max_steps=_get_int("AGENT_MAX_STEPS", 5),
            mood_cache_ttl_ms=_get_int("MOOD_CACHE_TTL_MS", 1800000),
            mood_cache_capacity=_get_int("MOOD_CACHE_CAPACITY", 1),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_int("PORT", 8000),
        )


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")
    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _get_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
