# src/services/tools.py

"""The closed set of tools the oracle may call, and their schemas."""

from enum import Enum
from typing import Any


class ToolKind(str, Enum):
    """Tool names as declared to the oracle."""

    SEARCH_PRODUCTS = "searchProducts"
    CONVERT_CURRENCIES = "convertCurrencies"

    @classmethod
    def from_name(cls, name: str) -> "ToolKind | None":
        """Map a requested tool name to its kind, or ``None`` if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


_SEARCH_PRODUCTS_SCHEMA: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": ToolKind.SEARCH_PRODUCTS.value,
        "description": (
            "Search for products based on user criteria. "
            "Returns exactly 2 relevant products."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Search term for product name or description"
                    ),
                },
                "productType": {
                    "type": "string",
                    "description": "Product category or type to filter by",
                },
                "minPrice": {
                    "type": "number",
                    "description": "Minimum price filter",
                },
                "maxPrice": {
                    "type": "number",
                    "description": "Maximum price filter",
                },
                "hasDiscount": {
                    "type": "boolean",
                    "description": "Filter for products with discounts/sales",
                },
            },
            "required": [],
        },
    },
}

_CONVERT_CURRENCIES_SCHEMA: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": ToolKind.CONVERT_CURRENCIES.value,
        "description": (
            "Convert amount between different currencies using "
            "real-time exchange rates"
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "amount": {
                    "type": "number",
                    "description": "Amount to convert",
                },
                "fromCurrency": {
                    "type": "string",
                    "description": (
                        "Source currency code (3 letters, e.g., USD)"
                    ),
                },
                "toCurrency": {
                    "type": "string",
                    "description": (
                        "Target currency code (3 letters, e.g., EUR)"
                    ),
                },
            },
            "required": ["amount", "fromCurrency", "toCurrency"],
        },
    },
}

TOOL_SCHEMAS: list[dict[str, Any]] = [
    _SEARCH_PRODUCTS_SCHEMA,
    _CONVERT_CURRENCIES_SCHEMA,
]
