# src/filters/product_validator.py

"""Catalog validation: drop rows that cannot be served before search."""

import logging

from src.models.product import Product

logger = logging.getLogger("shop_assistant.filters")


class ProductValidator:
    """Validate loaded products and drop rows missing their identity."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with a blank title or URL, or a repeated URL.

        The URL is the catalog's unique key, so the first row with a
        given URL wins.  Returns the valid products and the count of
        dropped rows.
        """
        valid: list[Product] = []
        seen_urls: set[str] = set()
        dropped = 0

        for product in products:
            if not product.title.strip() or not product.url.strip():
                logger.warning(
                    "Skipping invalid product row "
                    "(title=%r, url=%r)",
                    product.title[:100],
                    product.url[:100],
                )
                dropped += 1
                continue
            if product.url in seen_urls:
                logger.warning(
                    "Skipping duplicate product url %s (title=%r)",
                    product.url,
                    product.title[:100],
                )
                dropped += 1
                continue
            seen_urls.add(product.url)
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid catalog rows",
                dropped,
            )

        return valid, dropped
