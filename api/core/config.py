# core/config.py
import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# Load .env
load_dotenv()

# Project root is two levels up from api/core/
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ---- CORPUS ----
CORPUS_PATH = Path(os.getenv(
    "SCRIPTURE_CORPUS_PATH",
    str(PROJECT_ROOT / "data" / "gutenberg.txt"),
))

# ---- SNAPSHOT CACHE ----
CACHE_ENABLED = _env_bool("SCRIPTURE_CACHE_ENABLED", True)
CACHE_PATH = Path(os.getenv(
    "SCRIPTURE_CACHE_PATH",
    os.path.join(tempfile.gettempdir(), "scripture_corpus.pickle"),
))

# ---- LOGGING ----
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# ---- HTTP API ----
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "5055"))
API_PREFIX = os.getenv("API_PREFIX", "/bom_api/v1")

# ---- DAILY VERSE EMAIL ----
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
DAILY_VERSE_FROM = os.getenv("DAILY_VERSE_FROM")
DAILY_VERSE_TO = os.getenv("DAILY_VERSE_TO")
