import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from .fallback import DEFAULT_LOCATION

load_dotenv()


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    ws_port: int = 8080
    openaq_base_url: str = "https://api.openaq.org/v3"
    openaq_api_key: Optional[str] = None
    default_location: str = DEFAULT_LOCATION
    stream_interval_seconds: float = 30.0
    cors_origins: tuple = ("*",)
    log_level: str = "INFO"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        ws_port=int(os.getenv("WS_PORT", "8080")),
        openaq_base_url=os.getenv("OPENAQ_BASE_URL", "https://api.openaq.org/v3"),
        openaq_api_key=os.getenv("OPENAQ_API_KEY") or None,
        default_location=os.getenv("DEFAULT_LOCATION", DEFAULT_LOCATION),
        stream_interval_seconds=float(os.getenv("STREAM_INTERVAL_SECONDS", "30")),
        cors_origins=tuple(_split_origins(os.getenv("CORS_ORIGINS", "*"))) or ("*",),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
