"""
Environment-driven settings for the wallet bank service.

Values are read once at import time; a `.env` file anywhere up the tree is
loaded first without overriding variables already set in the environment.
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True), override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./walletbank.db")
SQL_ECHO = _env_bool("SQL_ECHO", False)
AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", True)

TRANSACTION_HISTORY_LIMIT = int(os.getenv("TRANSACTION_HISTORY_LIMIT", "50"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("WALLETBANK_LOG_DIR", Path(__file__).resolve().parents[2] / "logs"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
