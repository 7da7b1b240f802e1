# src/config.py
import os
from typing import List


def _normalize_db_url(url: str) -> str:
    # hosted providers hand out postgres:// URLs, which SQLAlchemy 1.4+ rejects
    return url.replace("postgres://", "postgresql://", 1) if url.startswith("postgres://") else url


class Settings:
    """Application configuration settings."""
    DATABASE_URL: str = _normalize_db_url(os.getenv("DATABASE_URL", "sqlite:///./safesurf.db"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-for-jwt")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))
    COOKIE_NAME: str = "safesurf_session"

    # First login with this email gets the admin role
    OWNER_EMAIL: str = os.getenv("OWNER_EMAIL", "")

    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost,http://127.0.0.1:5173"
    ).split(",")

    # Chat assistant (OpenAI-compatible chat completions endpoint)
    LLM_API_URL: str = os.getenv("LLM_API_URL", "https://api.openai.com/v1/chat/completions")
    LLM_API_KEY: str = os.getenv("LLM_API_KEY", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-3.5-turbo")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", 15))
    CHAT_HISTORY_LIMIT: int = 10

    # Subscription settings
    PRO_MONTHLY_PRICE: int = 999  # cents
    CURRENCY: str = "USD"
    SUBSCRIPTION_DURATION_DAYS: int = 30
    PAYMENT_EXPIRE_MINUTES: int = 30

    # Background sweeps
    SCHEDULER_ENABLED: bool = os.getenv("SCHEDULER_ENABLED", "true").lower() == "true"
    SWEEP_INTERVAL_MINUTES: int = int(os.getenv("SWEEP_INTERVAL_MINUTES", 1))


settings = Settings()
