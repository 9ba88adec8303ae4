# tests/test_rate_cache.py

"""Tests for the exchange rate TTL cache."""

import unittest
from unittest.mock import patch

from src.models.currency import CurrencyInfo
from src.storage.rate_cache import RateCache, rate_key


class TestRateCache(unittest.TestCase):
    """RateCache unit tests."""

    def setUp(self) -> None:
        self.cache = RateCache(ttl=60)

    # ── Rates ────────────────────────────────────────────

    def test_key_is_directional_and_uppercase(self) -> None:
        self.assertEqual(rate_key("eur", "usd"), "EUR-USD")
        self.assertNotEqual(rate_key("EUR", "USD"), rate_key("USD", "EUR"))

    def test_miss_on_empty(self) -> None:
        self.assertIsNone(self.cache.get_rate("USD", "EUR"))

    def test_hit_within_ttl(self) -> None:
        with patch("src.storage.rate_cache.time.time", return_value=1000.0):
            self.cache.store_rate("USD", "EUR", 0.9)
        with patch("src.storage.rate_cache.time.time", return_value=1059.0):
            self.assertEqual(self.cache.get_rate("USD", "EUR"), 0.9)

    def test_expired_at_ttl(self) -> None:
        with patch("src.storage.rate_cache.time.time", return_value=1000.0):
            self.cache.store_rate("USD", "EUR", 0.9)
        with patch("src.storage.rate_cache.time.time", return_value=1060.0):
            self.assertIsNone(self.cache.get_rate("USD", "EUR"))

    def test_reverse_direction_not_shared(self) -> None:
        self.cache.store_rate("USD", "EUR", 0.9)
        self.assertIsNone(self.cache.get_rate("EUR", "USD"))

    def test_store_replaces_entry(self) -> None:
        self.cache.store_rate("USD", "EUR", 0.9)
        self.cache.store_rate("USD", "EUR", 0.95)
        self.assertEqual(self.cache.get_rate("USD", "EUR"), 0.95)

    # ── Currency list ────────────────────────────────────

    def test_currency_list_round_trip(self) -> None:
        currencies = [CurrencyInfo("USD", "US Dollar", "$")]
        self.cache.store_currencies(currencies)
        self.assertEqual(self.cache.get_currencies(), currencies)

    def test_currency_list_expires(self) -> None:
        with patch("src.storage.rate_cache.time.time", return_value=0.0):
            self.cache.store_currencies([CurrencyInfo("USD", "US Dollar")])
        with patch("src.storage.rate_cache.time.time", return_value=61.0):
            self.assertIsNone(self.cache.get_currencies())

    # ── Housekeeping ─────────────────────────────────────

    def test_clear_returns_count(self) -> None:
        self.cache.store_rate("USD", "EUR", 0.9)
        self.cache.store_rate("EUR", "GBP", 0.8)
        self.cache.store_currencies([CurrencyInfo("USD", "US Dollar")])
        self.assertEqual(self.cache.clear(), 3)
        self.assertIsNone(self.cache.get_rate("USD", "EUR"))
        self.assertIsNone(self.cache.get_currencies())
        self.assertEqual(self.cache.clear(), 0)

    def test_default_ttl_from_settings(self) -> None:
        with patch(
            "src.storage.rate_cache.Settings.EXCHANGE_RATES_CACHE_TTL", 42.0
        ):
            self.assertEqual(RateCache().ttl, 42.0)


if __name__ == "__main__":
    unittest.main()
