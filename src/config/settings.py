# src/config/settings.py

"""Central configuration for the shop_assistant service."""

import os
from pathlib import Path

from dotenv import load_dotenv

from src.models.errors import ConfigurationError

load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment.

    An unparseable value becomes NaN so that ``Settings.validate()``
    rejects it instead of silently using the default.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return float("nan")


class Settings:
    """Central configuration for the shop_assistant service."""

    # --- Reasoning oracle (OpenAI-compatible chat completions) ---
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
    OPENAI_BASE_URL: str = os.getenv(
        "OPENAI_BASE_URL", "https://api.openai.com/v1"
    )
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENAI_MAX_TOKENS: int = 800
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_KEY_PREFIX: str = "sk-"

    # --- Exchange rates ---
    EXCHANGE_RATES_API_KEY: str = os.getenv(
        "EXCHANGE_RATES_API_KEY", ""
    ).strip()
    EXCHANGE_RATES_BASE_URL: str = os.getenv(
        "EXCHANGE_RATES_BASE_URL", "https://openexchangerates.org/api"
    )
    EXCHANGE_RATES_SOURCE: str = "openexchangerates.org"
    EXCHANGE_RATES_CACHE_TTL: float = _env_float(
        "EXCHANGE_RATES_CACHE_TTL", 3600.0
    )                                   # Seconds
    EXCHANGE_RATES_MIN_KEY_LENGTH: int = 16
    MAX_CONVERSION_AMOUNT: float = 1_000_000_000

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 10           # Rate provider timeout (secs)
    ORACLE_TIMEOUT: int = 30            # Chat completion timeout (secs)
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": "shop-assistant/1.0",
    }

    # --- Catalog search ---
    DEFAULT_SEARCH_LIMIT: int = 20
    TOOL_SEARCH_LIMIT: int = 2          # Products returned to the oracle

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    PRODUCTS_CSV_PATH: Path = Path(
        os.getenv(
            "PRODUCTS_CSV_PATH",
            str(BASE_DIR / "data" / "products.csv"),
        )
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    @classmethod
    def validate(cls) -> None:
        """Check credentials and numeric settings before startup.

        Raises:
            ConfigurationError: listing every missing credential, or
                describing the first malformed value.
        """
        missing = [
            name
            for name in ("OPENAI_API_KEY", "EXCHANGE_RATES_API_KEY")
            if not getattr(cls, name)
        ]
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: "
                f"{', '.join(missing)}. Check your .env file."
            )

        if not cls.OPENAI_API_KEY.startswith(cls.OPENAI_KEY_PREFIX):
            raise ConfigurationError(
                "OPENAI_API_KEY must start with "
                f"'{cls.OPENAI_KEY_PREFIX}'"
            )

        if (
            len(cls.EXCHANGE_RATES_API_KEY)
            < cls.EXCHANGE_RATES_MIN_KEY_LENGTH
        ):
            raise ConfigurationError(
                "EXCHANGE_RATES_API_KEY appears to be invalid (too short)"
            )

        # NaN fails this comparison too
        if not cls.EXCHANGE_RATES_CACHE_TTL > 0:
            raise ConfigurationError(
                "EXCHANGE_RATES_CACHE_TTL must be a positive number"
            )
