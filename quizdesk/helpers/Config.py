"""
Environment backed settings. Values are read on every call so a running
process (or a test) picks up changes without re-importing.
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_AUTH_PROVIDER_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
DEFAULT_QUIZ_DURATION_SECONDS = 1500


def get_db_name() -> str:
    db_name = os.getenv("DB_NAME")
    if not db_name:
        raise ValueError("DB_NAME environment variable is not set")
    return db_name


def get_admin_emails() -> List[str]:
    raw = os.getenv("ADMIN_EMAILS", "")
    return [email.strip() for email in raw.split(",") if email.strip()]


def get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable is not set")
    return secret


def get_jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def get_jwt_expiry_minutes() -> int:
    return int(os.getenv("JWT_EXPIRY_MINUTES", "720"))


def get_auth_provider_url() -> str:
    return os.getenv("AUTH_PROVIDER_URL", DEFAULT_AUTH_PROVIDER_URL)


def get_auth_provider_api_key() -> str:
    return os.getenv("AUTH_PROVIDER_API_KEY", "")


def get_quiz_duration_seconds() -> int:
    return int(os.getenv("QUIZ_DURATION_SECONDS", str(DEFAULT_QUIZ_DURATION_SECONDS)))


def get_session_sweep_minutes() -> float:
    return float(os.getenv("QUIZ_SESSION_SWEEP_MINUTES", "1"))


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
