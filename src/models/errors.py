# src/models/errors.py

"""Exception hierarchy shared across the shop_assistant modules."""


class ShopAssistantError(Exception):
    """Base class for every error raised by shop_assistant."""


class ConfigurationError(ShopAssistantError):
    """Missing or malformed configuration; fatal at startup."""


class CatalogLoadError(ShopAssistantError):
    """The product CSV is missing or unreadable."""


class CatalogNotReadyError(ShopAssistantError):
    """A search ran before the catalog finished loading."""


class CurrencyValidationError(ShopAssistantError, ValueError):
    """Malformed conversion arguments (currency code or amount)."""


class ExchangeRateError(ShopAssistantError):
    """A rate could not be obtained from the rate provider."""


class ProviderError(ShopAssistantError):
    """An outbound API call failed (transport, HTTP status or JSON)."""


class OracleError(ProviderError):
    """The chat-completion oracle failed or answered malformed data."""
