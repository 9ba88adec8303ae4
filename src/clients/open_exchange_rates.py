# src/clients/open_exchange_rates.py

"""Client for the openexchangerates.org JSON API."""

from typing import Any

from src.clients.base_client import BaseApiClient
from src.config.settings import Settings
from src.models.errors import ProviderError


class OpenExchangeRatesProvider(BaseApiClient):
    """Fetches latest rates and the currency directory.

    Rates are quoted against the provider's base currency (USD on the
    free plan); conversion between two non-base currencies is left to
    the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = Settings.REQUEST_TIMEOUT,
    ) -> None:
        super().__init__(
            "exchange_rates",
            base_url or Settings.EXCHANGE_RATES_BASE_URL,
            timeout,
        )
        self.api_key = (
            api_key if api_key is not None
            else Settings.EXCHANGE_RATES_API_KEY
        )
        self.name = Settings.EXCHANGE_RATES_SOURCE

    def fetch_latest_rates(
        self, symbols: list[str],
    ) -> tuple[str, dict[str, float]]:
        """Return ``(base, rates)`` for the requested symbols.

        Raises:
            ProviderError: on transport failure or a payload without a
                ``base`` string and a ``rates`` object.
        """
        data = self._get(
            "latest.json",
            params={"app_id": self.api_key, "symbols": ",".join(symbols)},
        )
        if not isinstance(data, dict):
            raise ProviderError("Invalid response from exchange rates API")
        base = data.get("base")
        rates = data.get("rates")
        if not isinstance(base, str) or not isinstance(rates, dict):
            raise ProviderError("Invalid response from exchange rates API")

        parsed: dict[str, float] = {}
        for code, value in rates.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                parsed[str(code).upper()] = float(value)
        self.logger.debug(
            "Fetched %d rates against %s for %s",
            len(parsed),
            base,
            symbols,
        )
        return base.upper(), parsed

    def fetch_currencies(self) -> dict[str, str]:
        """Return the provider's ``{code: name}`` directory."""
        data: Any = self._get("currencies.json", params={"app_id": self.api_key})
        if not isinstance(data, dict):
            raise ProviderError("Invalid currencies response")
        # Blank or missing names fall back to the code itself
        return {
            str(code).upper(): (
                name if isinstance(name, str) and name else str(code).upper()
            )
            for code, name in data.items()
        }
