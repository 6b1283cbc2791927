# config.py
# Role: Environment-driven settings for FinanceiroX.
#       Loads a local .env (if present) and exposes plain module constants.

import os
from datetime import date, datetime
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()


def _env_truthy(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default)
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# -------------------------------------------------------------------
# Database
# -------------------------------------------------------------------

# Empty means "use the default SQLite file" (see db.py)
DATABASE_URL = os.getenv("FINX_DATABASE_URL", "").strip()

# -------------------------------------------------------------------
# Identity / session
# -------------------------------------------------------------------

# Single-tenant fallback identity, used when no session cookie is sent
SINGLE_USER_EMAIL = os.getenv("FINX_SINGLE_USER_EMAIL", "").strip().lower() or None

SECRET_KEY = os.getenv("FINX_SECRET_KEY", "dev-secret-key-change-me")

SESSION_COOKIE = "fx_session"
SESSION_LAST_COOKIE = "fx_session_last"
SESSION_MAX_AGE = 60 * 60 * 24 * 7
SESSION_IDLE_MINUTES = _env_int("FINX_SESSION_IDLE_MINUTES", 30)
SECURE_COOKIES = _env_truthy("FINX_SECURE_COOKIES")

# -------------------------------------------------------------------
# Misc
# -------------------------------------------------------------------

TIMEZONE = ZoneInfo(os.getenv("FINX_TIMEZONE", "Asia/Tokyo"))

LOG_LEVEL = os.getenv("FINX_LOG_LEVEL", "INFO").upper()


def now() -> datetime:
    """Current wall-clock time in the configured timezone."""
    return datetime.now(TIMEZONE)


def today() -> date:
    return now().date()
