import logging
import os
from typing import List, Optional

PORT = int(os.getenv("PORT", 3001))

# Mock API storage: the flat JSON document, or MongoDB when DATABASE_URL is set
DB_JSON_PATH = os.getenv("DB_JSON_PATH", "db.json")
DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "student_dashboard")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "https://student-dashboard-frontend.onrender.com",
]

PRODUCTION_API_URL = "https://student-dashboard-api-nb82.onrender.com"
LOCAL_API_URL = "http://localhost:3001"
API_TIMEOUT = float(os.getenv("API_TIMEOUT", 10))

SESSION_FILE = os.getenv("SESSION_FILE", "session.json")
SESSION_KEY = "dashboard_user"

SEARCH_DEBOUNCE_SECONDS = 0.3
STUDENTS_PER_PAGE = 6

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def resolve_api_base_url(hostname: Optional[str] = None) -> str:
    """Pick the API base URL: explicit override, then deployed host, then local."""
    override = os.getenv("API_BASE_URL")
    if override:
        return override.rstrip("/")
    if hostname and "render.com" in hostname:
        return PRODUCTION_API_URL
    return LOCAL_API_URL


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
