"""
Settings -- process-wide configuration loaded once at startup.

All values come from environment variables (a local .env file is loaded
first via python-dotenv). Settings are frozen: nothing mutates them after
the app is created.

    settings = load_settings()
    settings.require_api_key()   # raises ConfigurationError if missing

Variables:
  OPENROUTER_API_KEY      (required to serve)
  LLM_BASE_URL            default: https://openrouter.ai/api/v1
  LLM_MODEL               default: openai/gpt-4o
  LLM_TEMPERATURE         default: 0.2
  LLM_MAX_TOKENS          default: 1000
  LLM_TIMEOUT             default: 120 (seconds)
  LLM_JSON_MODE           default: true
  PACING_INTERVAL_SECONDS default: 0.5
  MAX_UPLOAD_BYTES        default: 10 MB
  RATE_LIMIT_PER_MINUTE   default: 30
  CORS_ORIGINS            comma separated, default: localhost dev ports
  PORT                    default: 5000
  LOG_LEVEL               default: INFO
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 1000
DEFAULT_LLM_TIMEOUT = 120.0
DEFAULT_PACING_INTERVAL = 0.5
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_RATE_LIMIT = 30
DEFAULT_PORT = 5000

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:5000",
)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    llm_timeout: float = DEFAULT_LLM_TIMEOUT
    json_mode: bool = True
    pacing_interval: float = DEFAULT_PACING_INTERVAL
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    rate_limit_per_minute: int = DEFAULT_RATE_LIMIT
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("OpenRouter API key is required (set OPENROUTER_API_KEY)")
        return self.api_key


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"[Config] {name}={raw!r} is not an integer, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"[Config] {name}={raw!r} is not a number, using {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("true", "1", "yes", "on")


def _env_origins() -> tuple[str, ...]:
    raw = os.environ.get("CORS_ORIGINS", "")
    if raw.strip():
        return tuple(o.strip() for o in raw.split(",") if o.strip())
    return DEFAULT_CORS_ORIGINS


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Build Settings from the environment, loading .env first if present."""
    load_dotenv(dotenv_path)

    return Settings(
        api_key=os.environ.get("OPENROUTER_API_KEY", "").strip(),
        base_url=os.environ.get("LLM_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        model=os.environ.get("LLM_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        temperature=_env_float("LLM_TEMPERATURE", DEFAULT_TEMPERATURE),
        max_tokens=_env_int("LLM_MAX_TOKENS", DEFAULT_MAX_TOKENS),
        llm_timeout=_env_float("LLM_TIMEOUT", DEFAULT_LLM_TIMEOUT),
        json_mode=_env_bool("LLM_JSON_MODE", True),
        pacing_interval=_env_float("PACING_INTERVAL_SECONDS", DEFAULT_PACING_INTERVAL),
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        rate_limit_per_minute=_env_int("RATE_LIMIT_PER_MINUTE", DEFAULT_RATE_LIMIT),
        cors_origins=_env_origins(),
        port=_env_int("PORT", DEFAULT_PORT),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for CLI and server entrypoints."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
