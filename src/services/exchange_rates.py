# src/services/exchange_rates.py

"""Exchange rate lookups and currency conversion with TTL caching."""

import logging
import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from src.clients.open_exchange_rates import OpenExchangeRatesProvider
from src.config.settings import Settings
from src.models.currency import CurrencyConversion, CurrencyInfo
from src.models.errors import CurrencyValidationError, ExchangeRateError
from src.services.interfaces import RateProvider
from src.storage.rate_cache import RateCache

logger = logging.getLogger("shop_assistant.exchange_rates")

_CODE_RE = re.compile(r"^[A-Za-z]{3}$")

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "CAD": "C$",
    "AUD": "A$", "CHF": "CHF", "CNY": "¥", "INR": "₹", "KRW": "₩",
    "BRL": "R$", "MXN": "$", "SEK": "kr", "NOK": "kr", "DKK": "kr",
    "PLN": "zł", "CZK": "Kč", "HUF": "Ft", "RUB": "₽", "ZAR": "R",
    "SGD": "S$", "HKD": "HK$", "NZD": "NZ$", "TRY": "₺", "ILS": "₪",
    "AED": "د.إ", "SAR": "﷼", "EGP": "E£", "THB": "฿", "MYR": "RM",
    "IDR": "Rp", "PHP": "₱", "VND": "₫",
}

_FALLBACK_NAMES: list[tuple[str, str]] = [
    ("USD", "US Dollar"),
    ("EUR", "Euro"),
    ("GBP", "British Pound"),
    ("JPY", "Japanese Yen"),
    ("CAD", "Canadian Dollar"),
    ("AUD", "Australian Dollar"),
    ("CHF", "Swiss Franc"),
    ("CNY", "Chinese Yuan"),
    ("INR", "Indian Rupee"),
    ("KRW", "South Korean Won"),
    ("BRL", "Brazilian Real"),
    ("MXN", "Mexican Peso"),
    ("RUB", "Russian Ruble"),
    ("ZAR", "South African Rand"),
    ("SGD", "Singapore Dollar"),
    ("HKD", "Hong Kong Dollar"),
    ("NZD", "New Zealand Dollar"),
    ("SEK", "Swedish Krona"),
    ("NOK", "Norwegian Krone"),
    ("DKK", "Danish Krone"),
]

FALLBACK_CURRENCIES: tuple[CurrencyInfo, ...] = tuple(
    CurrencyInfo(code=code, name=name, symbol=CURRENCY_SYMBOLS.get(code))
    for code, name in _FALLBACK_NAMES
)

COMMON_CURRENCIES: frozenset[str] = frozenset({
    "USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW",
})


def is_currency_code(code: object) -> bool:
    """True for exactly three ASCII letters, ignoring surrounding space."""
    return isinstance(code, str) and bool(_CODE_RE.match(code.strip()))


def round_half_up(value: float, places: int = 4) -> float:
    """Round half away from zero at *places* decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class ExchangeRateClient:
    """Rates and conversions backed by a remote :class:`RateProvider`.

    Lookups go through a :class:`RateCache` owned by this client.  Rates
    are never retried internally; a failed fetch surfaces once as
    :class:`ExchangeRateError`.
    """

    def __init__(
        self,
        provider: RateProvider,
        cache: RateCache | None = None,
    ) -> None:
        self.provider = provider
        self.cache = cache or RateCache()

    @classmethod
    def from_settings(cls) -> "ExchangeRateClient":
        return cls(OpenExchangeRatesProvider(), RateCache())

    # ── Rates ────────────────────────────────────────────

    @staticmethod
    def _normalise_code(code: object, label: str) -> str:
        if not is_currency_code(code):
            raise CurrencyValidationError(
                f"{label} currency must be a valid 3-letter currency code"
            )
        return str(code).strip().upper()

    def get_exchange_rate(
        self, from_currency: str, to_currency: str,
    ) -> float:
        """Return how many *to_currency* one *from_currency* buys.

        Raises:
            CurrencyValidationError: if either code is not 3 letters.
            ExchangeRateError: on any provider or derivation failure.
        """
        src = self._normalise_code(from_currency, "From")
        dst = self._normalise_code(to_currency, "To")

        cached = self.cache.get_rate(src, dst)
        if cached is not None:
            return cached

        try:
            rate = self._fetch_rate(src, dst)
        except Exception as exc:
            message = f"Failed to get exchange rate from {src} to {dst}: {exc}"
            logger.error(message)
            raise ExchangeRateError(message) from exc

        self.cache.store_rate(src, dst, rate)
        return rate

    def _fetch_rate(self, src: str, dst: str) -> float:
        base, rates = self.provider.fetch_latest_rates([src, dst])
        if not rates:
            raise ValueError("No exchange rates returned from API")

        if src == base:
            rate = self._require(rates, dst)
        elif dst == base:
            rate = 1 / self._require(rates, src)
        else:
            rate = self._require(rates, dst) / self._require(rates, src)

        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Invalid exchange rate calculated: {rate}")
        return rate

    @staticmethod
    def _require(rates: dict[str, float], code: str) -> float:
        value = rates.get(code)
        if not value:
            raise ValueError(f"Exchange rate not found for {code}")
        return value

    # ── Conversion ───────────────────────────────────────

    def convert_currency(
        self, amount: float, from_currency: str, to_currency: str,
    ) -> CurrencyConversion:
        """Convert *amount*; same-currency requests skip the network."""
        if (
            isinstance(amount, bool)
            or not isinstance(amount, (int, float))
            or not math.isfinite(amount)
            or amount <= 0
        ):
            raise CurrencyValidationError(
                "Amount must be a positive finite number"
            )
        if amount > Settings.MAX_CONVERSION_AMOUNT:
            raise CurrencyValidationError(
                "Amount too large (max: 1,000,000,000)"
            )
        src = self._normalise_code(from_currency, "From")
        dst = self._normalise_code(to_currency, "To")
        timestamp = datetime.now(timezone.utc).isoformat()

        if src == dst:
            return CurrencyConversion(
                amount=amount,
                from_currency=src,
                to_currency=dst,
                converted_amount=amount,
                exchange_rate=1.0,
                timestamp=timestamp,
                source="direct",
            )

        rate = self.get_exchange_rate(src, dst)
        conversion = CurrencyConversion(
            amount=amount,
            from_currency=src,
            to_currency=dst,
            converted_amount=round_half_up(amount * rate),
            exchange_rate=rate,
            timestamp=timestamp,
            source=self.provider.name,
        )
        logger.info("Converted %s", conversion.formatted_conversion)
        return conversion

    # ── Currency directory ───────────────────────────────

    def get_supported_currencies(self) -> list[CurrencyInfo]:
        """Provider directory, or the fixed fallback list on failure."""
        cached = self.cache.get_currencies()
        if cached is not None:
            return cached

        try:
            names = self.provider.fetch_currencies()
            if not names:
                raise ValueError("No currencies returned from API")
        except Exception as exc:
            logger.warning(
                "Using fallback currencies (%d currencies): %s",
                len(FALLBACK_CURRENCIES),
                exc,
            )
            return list(FALLBACK_CURRENCIES)

        currencies = [
            CurrencyInfo(
                code=code, name=name, symbol=CURRENCY_SYMBOLS.get(code)
            )
            for code, name in names.items()
        ]
        self.cache.store_currencies(currencies)
        logger.info("Fetched %d supported currencies", len(currencies))
        return currencies

    def is_currency_supported(self, code: str) -> bool:
        if not is_currency_code(code):
            return False
        wanted = code.strip().upper()
        try:
            return any(
                c.code == wanted for c in self.get_supported_currencies()
            )
        except Exception as exc:
            logger.warning(
                "Currency support check failed for %s: %s", wanted, exc
            )
            return wanted in COMMON_CURRENCIES

    # ── Housekeeping ─────────────────────────────────────

    def is_available(self) -> bool:
        """Live USD to EUR probe; never raises."""
        try:
            self._fetch_rate("USD", "EUR")
        except Exception as exc:
            logger.warning("Exchange rate service unavailable: %s", exc)
            return False
        return True

    def clear_cache(self) -> int:
        return self.cache.clear()
