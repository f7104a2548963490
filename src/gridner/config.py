"""Configuration management for gridner."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_log_level() -> str:
    """Parse the log level from environment variable."""
    level = os.getenv("LOG_LEVEL", "").strip().upper()
    if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return level
    return "INFO"


class Settings(BaseModel):
    """Application settings."""

    # Database path for the persisted change log
    database_path: Path = Path(os.getenv("DATABASE_PATH", "data/gridner.db"))

    # Logging
    log_level: str = _parse_log_level()

    # Extraction services
    ner_request_timeout: float = float(os.getenv("NER_REQUEST_TIMEOUT", "30.0"))  # Seconds per request
    dummy_ner_url: Optional[str] = os.getenv("DUMMY_NER_URL")  # Overrides the public Dummy NER endpoint


settings = Settings()
