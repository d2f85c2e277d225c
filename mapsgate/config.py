from pydantic import BaseModel
from typing import Optional
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Load .env file if it exists (before reading os.getenv)
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                # Only set if not already in environment (env vars take precedence)
                if key not in os.environ:
                    os.environ[key] = value


def _sanitize_ascii(val: str) -> str:
    """Strip non-ASCII characters from config values (prevents encoding errors)"""
    return val.encode('ascii', errors='ignore').decode('ascii').strip()


class Settings(BaseModel):
    service_name: str = "google-maps-mcp"
    version: str = "1.0.0"

    # Network
    host: str = os.getenv("MAPSGATE_HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Google Maps Directions
    google_maps_api_key: str = _sanitize_ascii(os.getenv("GOOGLE_MAPS_API_KEY", ""))
    google_maps_timeout: float = float(os.getenv("GOOGLE_MAPS_TIMEOUT", "10"))
    google_maps_language: str = _sanitize_ascii(os.getenv("GOOGLE_MAPS_LANGUAGE", "en"))
    google_maps_region: Optional[str] = _sanitize_ascii(os.getenv("GOOGLE_MAPS_REGION", "")) or None

    # Rate limiting (requests per window per caller)
    rate_limit: int = int(os.getenv("RATE_LIMIT", "50"))
    rate_limit_window_s: int = int(os.getenv("RATE_LIMIT_WINDOW", "3600"))
    sweep_interval_s: int = int(os.getenv("RATE_LIMIT_SWEEP_INTERVAL", "300"))

settings = Settings()


def require_api_key():
    """Refuse to start without upstream credentials."""
    if not settings.google_maps_api_key:
        raise SystemExit(
            "FATAL: GOOGLE_MAPS_API_KEY environment variable is required. "
            "Set it in the environment or in .env before starting the server."
        )
    _key = '***' + settings.google_maps_api_key[-4:] if len(settings.google_maps_api_key) > 4 else '***'
    logger.info(f"Config: Google Maps key={_key}, language={settings.google_maps_language}")
    logger.info(f"Config: rate limit {settings.rate_limit} req / {settings.rate_limit_window_s}s per caller")
