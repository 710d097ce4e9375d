# app/core/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT_DIR = Path(__file__).resolve().parent.parent.parent

# .env im Projekt-Root hat Vorrang, sonst Suche ab CWD
dotenv_path = PROJECT_ROOT_DIR / ".env"
if dotenv_path.exists():
    load_dotenv(dotenv_path)
else:
    load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Datenbank ---
DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    sqlite_db_path = PROJECT_ROOT_DIR / "app" / "survey_engine.db"
    DATABASE_URL = f"sqlite+aiosqlite:///{sqlite_db_path}"

SQL_ECHO = _flag("SQL_ECHO")
AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", "true")

# --- Zugangstokens ---
TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "30"))
TOKEN_MAX_ATTEMPTS = int(os.getenv("TOKEN_MAX_ATTEMPTS", "10"))

# --- Identity Provider ---
# Header, den der vorgeschaltete Auth-Layer mit dem Principal-Namen setzt
PRINCIPAL_HEADER = os.getenv("PRINCIPAL_HEADER", "X-Authenticated-User")

# --- CORS ---
fallback_origins = [
    "http://127.0.0.1:3000",
    "http://localhost:3000",
]
env_origins = os.getenv("BACKEND_ALLOWED_ORIGINS")
ALLOWED_ORIGINS = (
    [origin.strip() for origin in env_origins.split(",") if origin.strip()]
    if env_origins
    else fallback_origins
)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Benachrichtigungen ---
NOTIFIER_BACKEND = os.getenv("NOTIFIER_BACKEND", "log")  # "log" oder "smtp"
NOTIFY_RESPONDENTS = _flag("NOTIFY_RESPONDENTS")
MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@localhost")
SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "25"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_USE_TLS = _flag("SMTP_USE_TLS")
