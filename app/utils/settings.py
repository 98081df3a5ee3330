# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", 30))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def require_database_url(url: str | None = None) -> str:
    """Zwraca DATABASE_URL albo przerywa start, gdy zmienna nie jest ustawiona."""
    url = url if url is not None else DATABASE_URL
    if not url or not url.strip():
        raise RuntimeError("DATABASE_URL is not set")
    return url.strip()
