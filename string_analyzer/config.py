from dataclasses import dataclass, field
from typing import List
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables only for local development
if os.path.exists('.env'):
    load_dotenv()
    logger.info("Loading from .env file (local development)")


def _split_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""
    app_name: str = "String Analyzer Service"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def get_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults"""
    return Settings(
        app_name=os.getenv("APP_NAME", "String Analyzer Service"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
    )
