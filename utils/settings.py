from __future__ import annotations
from functools import lru_cache
from pydantic import BaseModel
from dotenv import load_dotenv
import logging
import os

from utils.exceptions import ConfigError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

class Settings(BaseModel):
    # `python -O` clears __debug__, which plays the role of a release build.
    debug: bool = __debug__

    log_level: str = "INFO"
    log_rich_tracebacks: bool = True

def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")

def _env_level(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{name} is not a logging level: {level!r}")
    return level

def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        debug=_env_bool("INSTRUMENT_DEBUG", Settings().debug),

        log_level=_env_level("INSTRUMENT_LOG_LEVEL", Settings().log_level),
        log_rich_tracebacks=_env_bool("INSTRUMENT_RICH_TRACEBACKS", Settings().log_rich_tracebacks),
    )

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Read once per process; tests call get_settings.cache_clear() after touching the env.
    return load_settings()
