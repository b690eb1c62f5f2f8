"""
Application configuration from environment variables.

.env is loaded here (development only) so values are visible before any
constant below is read. Validates critical secrets at module load; missing
values raise RuntimeError.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Environment: development | production (affects .env loading)
ENV = os.getenv("ENV", "development").lower()

if ENV == "development":
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# --- Required (raise if missing) ---
JWT_SECRET = os.getenv("JWT_SECRET")

for name, val in [
    ("JWT_SECRET", JWT_SECRET),
]:
    if not val or not str(val).strip():
        raise RuntimeError(f"Required env var {name} is missing or empty")

JWT_ALGORITHM = "HS256"


# --- Optional with defaults ---
def _int_env(key: str, default: int, minimum: int = 1) -> int:
    try:
        return max(minimum, int(os.getenv(key, str(default))))
    except ValueError:
        return default


# Token lifetime in seconds; tokens carry an exp claim
JWT_MAX_AGE = _int_env("JWT_MAX_AGE", 86400, minimum=60)

# bcrypt cost factor; bcrypt rejects anything outside 4..31
BCRYPT_ROUNDS = min(31, _int_env("BCRYPT_ROUNDS", 10, minimum=4))

# Storage root; audio goes under uploads/<book_id>/, covers under uploads/<book_id>/covers/
UPLOADS_DIR = os.getenv("UPLOADS_DIR", "uploads")

# Allowed CORS origin; "*" allows any (bearer tokens, no cookies)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")

# Database URL; bare "sqlite://" keeps everything in process memory
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

# Bind address when started with `python main.py`
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 4000)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
