# src/models/product.py

"""Product data model for catalog entries."""

from dataclasses import dataclass

from src.filters.parsers import DEFAULT_PRICE, parse_currency, parse_price


@dataclass(frozen=True)
class Product:
    """A single catalog entry loaded from the product CSV.

    ``price`` keeps the original display string; use
    :attr:`numeric_price` for comparisons.
    """

    title: str
    url: str
    description: str = ""
    image_url: str = ""
    category: str = ""
    discount: int = 0
    price: str = DEFAULT_PRICE
    variants: str | None = None
    created_at: str = ""

    @property
    def has_discount(self) -> bool:
        return self.discount == 1

    @property
    def numeric_price(self) -> float:
        return parse_price(self.price)

    @property
    def currency(self) -> str:
        return parse_currency(self.price)

    @property
    def has_variants(self) -> bool:
        return bool(self.variants and self.variants.strip())

    @property
    def variant_list(self) -> list[str]:
        """Variants split on commas, trimmed, empties dropped."""
        if not self.variants:
            return []
        return [v.strip() for v in self.variants.split(",") if v.strip()]

    @property
    def summary(self) -> str:
        suffix = " (On Sale)" if self.has_discount else ""
        return f"{self.title} - {self.price}{suffix}"

    def matches_query(self, query: str) -> bool:
        """Case-insensitive substring match over title and description."""
        haystack = f"{self.title} {self.description}".lower()
        return query.lower() in haystack
