"""
Application configuration.
All secrets and connection strings are loaded exclusively from environment
variables (via the etc/app.conf file).  Nothing sensitive is hard-coded here.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → midnight-blog/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./midnight.db"

    # JWT signing secret – must be a long, random string
    secret_key: str

    # Token lifetime (1 week = 7 days * 24 hours * 60 minutes)
    access_token_expire_minutes: int = 10080

    # PBKDF2 iterations for stored passwords.  Lower it only in tests.
    password_hash_rounds: int = 600_000

    # Origins allowed to call the API from a browser (Vite dev server by default)
    cors_origins: List[str] = ["http://localhost:5173"]

    # Level for the "midnight" loggers; handlers come from etc/logging.conf
    log_level: str = "INFO"

    # Used only by seed_admin.py to bootstrap the first admin account.
    # After seeding these values are inert.
    first_admin_username: str = "admin"
    first_admin_email: str = ""
    first_admin_password: str = ""

    # app.conf lives in etc/ – resolved relative to the project root so that
    # the file is found regardless of the working directory.
    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf")}


# Module-level singleton – import this everywhere: from core.config import settings
settings = Settings()
