# src/filters/product_filter.py

"""Catalog filtering and relevance ordering."""

import logging

from src.models.product import Product

logger = logging.getLogger("shop_assistant.filters")


class ProductFilter:
    """Pure filters over a product list; every filter is ANDed by callers."""

    @staticmethod
    def by_query(products: list[Product], query: str) -> list[Product]:
        """Keep products whose title or description contains *query*."""
        needle = query.strip().lower()
        if not needle:
            return products
        return [p for p in products if p.matches_query(needle)]

    @staticmethod
    def by_category(
        products: list[Product], category: str,
    ) -> list[Product]:
        """Case-insensitive exact category match."""
        wanted = category.strip().lower()
        if not wanted:
            return products
        return [p for p in products if p.category.lower() == wanted]

    @staticmethod
    def by_discount(
        products: list[Product], has_discount: bool,
    ) -> list[Product]:
        return [p for p in products if p.has_discount == has_discount]

    @staticmethod
    def by_variants(
        products: list[Product], has_variants: bool,
    ) -> list[Product]:
        return [p for p in products if p.has_variants == has_variants]

    @staticmethod
    def by_price_range(
        products: list[Product],
        min_price: float | None = None,
        max_price: float | None = None,
    ) -> list[Product]:
        """Inclusive bounds on the parsed numeric price."""
        kept: list[Product] = []
        for product in products:
            price = product.numeric_price
            if min_price is not None and price < min_price:
                continue
            if max_price is not None and price > max_price:
                continue
            kept.append(product)

        excluded = len(products) - len(kept)
        if excluded:
            logger.debug(
                "Price range [%s, %s] excluded %d products",
                min_price,
                max_price,
                excluded,
            )
        return kept

    @staticmethod
    def sort_by_relevance(products: list[Product]) -> list[Product]:
        """Discounted products first, then ascending numeric price.

        The sort is stable, so ties keep catalog order.
        """
        return sorted(
            products,
            key=lambda p: (not p.has_discount, p.numeric_price),
        )
