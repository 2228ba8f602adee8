"""
Application settings read from the environment.

Values come from `backend/.env` or the repository-root `.env` when those
files exist (local development), otherwise straight from the process
environment (production).
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from core.logger import logger

DEFAULT_ADMIN_PASSWORD = 'admin1234'
DEFAULT_TIMEZONE = 'Asia/Seoul'
DEFAULT_WORKSHEET = 'Accounts'

_env_loaded = False


def load_environment() -> None:
    """Load .env files once per process."""
    global _env_loaded
    if _env_loaded:
        return

    backend_dir = Path(__file__).resolve().parent.parent
    env_path = backend_dir / '.env'
    root_env_path = backend_dir.parent / '.env'

    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger.info(f"Loaded environment from {env_path}")
    if root_env_path.exists():
        load_dotenv(dotenv_path=root_env_path)
        logger.info(f"Loaded environment from {root_env_path}")
    if not env_path.exists() and not root_env_path.exists():
        # In production, environment variables are set directly
        load_dotenv()

    _env_loaded = True


@dataclass(frozen=True)
class Settings:
    admin_password: str
    timezone: str = DEFAULT_TIMEZONE
    spreadsheet_id: Optional[str] = None
    worksheet: str = DEFAULT_WORKSHEET


def get_admin_password() -> str:
    """Get admin password from environment, falling back to the documented default."""
    password = os.getenv('ADMIN_PASSWORD')
    if not password:
        logger.warning("ADMIN_PASSWORD not set. Using the default admin password; set ADMIN_PASSWORD in production!")
        return DEFAULT_ADMIN_PASSWORD
    return password


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    load_environment()
    return Settings(
        admin_password=get_admin_password(),
        timezone=os.getenv('APP_TIMEZONE', DEFAULT_TIMEZONE),
        spreadsheet_id=os.getenv('GOOGLE_SHEETS_SPREADSHEET_ID'),
        worksheet=os.getenv('GOOGLE_SHEETS_WORKSHEET', DEFAULT_WORKSHEET),
    )
