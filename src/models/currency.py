# src/models/currency.py

"""Currency conversion results and currency directory entries."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


def _plain_number(value: float) -> str:
    """Render 350.0 as "350" and 350.5 as "350.5"."""
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass(frozen=True)
class CurrencyInfo:
    """One entry of the supported-currency directory."""

    code: str
    name: str
    symbol: str | None = None


@dataclass(frozen=True)
class CurrencyConversion:
    """Outcome of converting one amount into another currency."""

    amount: float
    from_currency: str
    to_currency: str
    converted_amount: float
    exchange_rate: float
    timestamp: str
    source: str

    @property
    def formatted_conversion(self) -> str:
        """e.g. ``350 EUR = 511.88 CAD``."""
        return (
            f"{_plain_number(self.amount)} {self.from_currency} = "
            f"{self.converted_amount:.2f} {self.to_currency}"
        )

    @property
    def exchange_rate_description(self) -> str:
        """e.g. ``1 EUR = 1.4625 CAD``."""
        return (
            f"1 {self.from_currency} = "
            f"{self.exchange_rate:.4f} {self.to_currency}"
        )

    @property
    def summary(self) -> str:
        return (
            f"{self.formatted_conversion} "
            f"(Rate: {self.exchange_rate_description}) - {self.timestamp}"
        )

    @property
    def reverse_amount(self) -> float:
        """The converted amount expressed back in the source currency."""
        return self.converted_amount / self.exchange_rate

    def is_recent(self, now: datetime | None = None) -> bool:
        """True when the conversion is less than an hour old."""
        current = now or datetime.now(timezone.utc)
        converted_at = datetime.fromisoformat(self.timestamp)
        if converted_at.tzinfo is None:
            converted_at = converted_at.replace(tzinfo=timezone.utc)
        return current - converted_at < timedelta(hours=1)
