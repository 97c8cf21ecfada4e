# backend configuration
# loads env vars for mongodb, gemini, gating thresholds and session timing

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent.parent / ".env")


class Settings(BaseSettings):
    # mongodb
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "journai_db")

    # gemini (completion service)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    CHAT_TEMPERATURE: float = 0.8
    CHAT_MAX_OUTPUT_TOKENS: int = 500
    SUMMARY_TEMPERATURE: float = 0.3

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # gating
    MENTOR_UNLOCK_THRESHOLD: int = 5
    VENT_COOLDOWN_HOURS: float = 12

    # sessions
    VENT_DURATION_MINUTES: int = 30
    MENTOR_DURATION_MINUTES: int = 60

    # completion retries and weekly summary shape
    COMPLETION_MAX_ATTEMPTS: int = 3
    SUMMARY_MAX_ITEMS: int = 3

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
