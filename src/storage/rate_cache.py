# src/storage/rate_cache.py

"""In-memory TTL cache for exchange rates and the currency directory."""

import logging
import threading
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.currency import CurrencyInfo

logger = logging.getLogger("shop_assistant.cache")


@dataclass(frozen=True)
class RateEntry:
    """A fetched rate and the time it was stored."""

    rate: float
    timestamp: float


@dataclass(frozen=True)
class CurrencyListEntry:
    """A fetched currency directory snapshot."""

    currencies: tuple[CurrencyInfo, ...]
    timestamp: float


def rate_key(from_currency: str, to_currency: str) -> str:
    return f"{from_currency.upper()}-{to_currency.upper()}"


class RateCache:
    """Shared cache of ``FROM-TO`` rates plus one currency list.

    Entries are valid while ``now - timestamp < ttl`` and are replaced
    whole on refresh, so concurrent writers simply race and the last
    one wins.  All access goes through one lock.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._ttl: float = (
            ttl if ttl is not None else Settings.EXCHANGE_RATES_CACHE_TTL
        )
        self._rates: dict[str, RateEntry] = {}
        self._currencies: CurrencyListEntry | None = None
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def _is_fresh(self, timestamp: float, now: float) -> bool:
        return now - timestamp < self._ttl

    # --- Rates ---

    def get_rate(self, from_currency: str, to_currency: str) -> float | None:
        """Return a fresh cached rate, or ``None`` on miss or expiry."""
        key = rate_key(from_currency, to_currency)
        with self._lock:
            entry = self._rates.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry.timestamp, time.time()):
            return None
        return entry.rate

    def store_rate(
        self, from_currency: str, to_currency: str, rate: float,
    ) -> None:
        key = rate_key(from_currency, to_currency)
        with self._lock:
            self._rates[key] = RateEntry(rate=rate, timestamp=time.time())
        logger.debug("Cached exchange rate %s = %s", key, rate)

    # --- Currency directory ---

    def get_currencies(self) -> list[CurrencyInfo] | None:
        with self._lock:
            entry = self._currencies
        if entry is None or not self._is_fresh(entry.timestamp, time.time()):
            return None
        return list(entry.currencies)

    def store_currencies(self, currencies: list[CurrencyInfo]) -> None:
        with self._lock:
            self._currencies = CurrencyListEntry(
                currencies=tuple(currencies), timestamp=time.time()
            )
        logger.debug("Cached %d supported currencies", len(currencies))

    def clear(self) -> int:
        """Purge all cached rates and the currency list.

        Returns the number of entries that were removed.
        """
        with self._lock:
            count = len(self._rates) + (1 if self._currencies else 0)
            self._rates.clear()
            self._currencies = None
        logger.info("Exchange rate cache purged (%d entries removed)", count)
        return count
