"""
Celebrity Penpal - Configuration
Environment-driven settings collected into a single dataclass.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parent.parent
RENDER_DATA_DIR = "/opt/render/project/src/data"
DB_FILENAME = "celebrity-pen-pal.db"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings."""
    data_dir: str
    database_url: str
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Handwrytten fulfillment (both key and secret required to send)
    handwrytten_api_key: Optional[str] = None
    handwrytten_api_secret: Optional[str] = None
    handwrytten_api_url: str = "https://api.handwrytten.com/v1"
    handwrytten_timeout: float = 30.0

    # Bearer tokens
    jwt_secret_key: str = "celebrity-penpal-secret-key-change-in-production"
    token_expire_hours: int = 0  # 0 = tokens never expire

    seed_on_startup: bool = True

    @property
    def fulfillment_configured(self) -> bool:
        return bool(self.handwrytten_api_key and self.handwrytten_api_secret)


def resolve_data_dir() -> str:
    """DATA_DIR wins, then the Render disk mount, then <backend>/data."""
    explicit = os.getenv("DATA_DIR")
    if explicit:
        return explicit
    if os.getenv("RENDER"):
        return RENDER_DATA_DIR
    return str(BACKEND_DIR / "data")


def load_settings() -> Settings:
    """Build Settings from the environment."""
    data_dir = resolve_data_dir()
    database_url = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{os.path.join(data_dir, DB_FILENAME)}"
    )
    return Settings(
        data_dir=data_dir,
        database_url=database_url,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        handwrytten_api_key=os.getenv("HANDWRYTTEN_API_KEY") or None,
        handwrytten_api_secret=os.getenv("HANDWRYTTEN_API_SECRET") or None,
        handwrytten_api_url=os.getenv("HANDWRYTTEN_API_URL", "https://api.handwrytten.com/v1"),
        handwrytten_timeout=float(os.getenv("HANDWRYTTEN_TIMEOUT", "30")),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "celebrity-penpal-secret-key-change-in-production"),
        token_expire_hours=int(os.getenv("TOKEN_EXPIRE_HOURS", "0")),
        seed_on_startup=_env_bool("SEED_ON_STARTUP", True),
    )
