# src/services/interfaces.py

"""Capability seams the orchestrator and rate client depend on."""

from typing import Any, Protocol

from src.models.conversation import ChatMessage, OracleReply
from src.models.currency import CurrencyConversion, CurrencyInfo
from src.services.catalog_search import (
    ProductSearchCriteria,
    ProductSearchResult,
)


class ProductSearcher(Protocol):
    def search(
        self, criteria: ProductSearchCriteria,
    ) -> ProductSearchResult: ...

    def get_categories(self) -> list[str]: ...


class CurrencyConverter(Protocol):
    def convert_currency(
        self, amount: Any, from_currency: Any, to_currency: Any,
    ) -> CurrencyConversion: ...

    def get_supported_currencies(self) -> list[CurrencyInfo]: ...

    def is_available(self) -> bool: ...


class ChatOracle(Protocol):
    def complete(
        self,
        messages: list[ChatMessage],
        tools: list[dict[str, Any]] | None = None,
    ) -> OracleReply: ...

    def is_available(self) -> bool: ...


class RateProvider(Protocol):
    """A remote source of rates quoted against one base currency."""

    name: str

    def fetch_latest_rates(
        self, symbols: list[str],
    ) -> tuple[str, dict[str, float]]: ...

    def fetch_currencies(self) -> dict[str, str]: ...
