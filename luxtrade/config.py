"""LuxTrade — application configuration.

Loads .env variables into a typed config object.
Validates numeric variables on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    db_path: str
    log_level: str
    api_port: int
    gemini_api_key: str  # empty disables AI analysis
    gemini_model: str
    usd_jpy_rate: float  # reference rate for JPY-quoted instruments
    default_balance: float
    default_currency: str

    @property
    def gemini_url(self) -> str:
        """Return the Gemini ``generateContent`` endpoint for the model."""
        return (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            f"{self.gemini_model}:generateContent"
        )


def _positive_float(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def default_config() -> Config:
    """Built-in defaults, without reading the environment."""
    return Config(
        db_path="data/luxtrade.db",
        log_level="INFO",
        api_port=8080,
        gemini_api_key="",
        gemini_model="gemini-3-pro-preview",
        usd_jpy_rate=158.0,
        default_balance=10_000.0,
        default_currency="USD",
    )


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the variable when a
    numeric variable is malformed or not positive.
    """
    load_dotenv(dotenv_path=env_path)

    return Config(
        db_path=os.environ.get("DB_PATH", "data/luxtrade.db"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        api_port=int(_positive_float("API_PORT", "8080")),
        gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
        gemini_model=os.environ.get("GEMINI_MODEL", "gemini-3-pro-preview"),
        usd_jpy_rate=_positive_float("USDJPY_REFERENCE_RATE", "158.00"),
        default_balance=_positive_float("DEFAULT_BALANCE", "10000"),
        default_currency=os.environ.get("DEFAULT_CURRENCY", "USD"),
    )
