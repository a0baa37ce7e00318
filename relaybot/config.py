"""Configuration for the relay bot."""
import os

BOT_TOKEN = os.environ.get("BOT_TOKEN")
WEBHOOK_SECRET = os.environ.get("WEBHOOK_SECRET")
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
AI_MODEL = os.environ.get("AI_MODEL", "gpt-5-mini")
MAX_OUTPUT_TOKENS = int(os.environ.get("MAX_OUTPUT_TOKENS", "800"))
DAILY_LIMIT = int(os.environ.get("DAILY_LIMIT", "20"))
DAILY_TOKEN_LIMIT = int(os.environ.get("DAILY_TOKEN_LIMIT", "20000"))
REDIS_URL = os.environ.get("REDIS_URL")
DATABASE_URL = os.environ.get("DATABASE_URL")
WEBHOOK_URL = os.environ.get("WEBHOOK_URL")
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "5000"))

REQUIRED = ["BOT_TOKEN", "WEBHOOK_SECRET", "OPENAI_API_KEY"]


def validate_config():
    missing = [k for k in REQUIRED if not os.environ.get(k)]
    if missing:
        raise ValueError(f"Missing: {', '.join(missing)}")
