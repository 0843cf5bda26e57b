from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .rules import DEFAULT_MODEL

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY")

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    export_dir: Path = Path(".")
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Unknown log level %r; using INFO", value)
            return "INFO"
        return level

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)


def load_settings() -> Settings:
    """Build settings from the environment (a local .env is honoured)."""
    load_dotenv()
    api_key = next((os.getenv(k) for k in API_KEY_ENV_VARS if os.getenv(k)), None)
    return Settings(
        api_key=api_key,
        model=os.getenv("SOILCARBON_MODEL", DEFAULT_MODEL),
        export_dir=Path(os.getenv("SOILCARBON_EXPORT_DIR", ".")),
        log_level=os.getenv("SOILCARBON_LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
