# src/storage/catalog_store.py

"""In-memory product catalog loaded once from a CSV file."""

import csv
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from src.config.settings import Settings
from src.filters.parsers import DEFAULT_PRICE, parse_discount_flag
from src.filters.product_validator import ProductValidator
from src.models.errors import CatalogLoadError
from src.models.product import Product

logger = logging.getLogger("shop_assistant.catalog")


@dataclass(frozen=True)
class CatalogStats:
    """Counters describing the loaded catalog."""

    total_products: int
    categories: int
    discounted_products: int
    products_with_variants: int
    is_ready: bool
    source_path: str


def _clean(value: str | None) -> str:
    """Trim a CSV cell; missing cells become empty strings."""
    return value.strip() if isinstance(value, str) else ""


def product_from_row(row: dict[str, str | None]) -> Product:
    """Build a Product from one CSV row, applying field fallbacks."""
    variants = _clean(row.get("variants"))
    return Product(
        title=_clean(row.get("displayTitle")),
        url=_clean(row.get("url")),
        description=_clean(row.get("embeddingText")),
        image_url=_clean(row.get("imageUrl")),
        category=_clean(row.get("productType")),
        discount=parse_discount_flag(row.get("discount")),
        price=_clean(row.get("price")) or DEFAULT_PRICE,
        variants=variants or None,
        created_at=(
            _clean(row.get("createDate"))
            or datetime.now(timezone.utc).isoformat()
        ),
    )


class CatalogStore:
    """Holds the product snapshot that the search engine reads.

    The snapshot is populated by a single :meth:`load` at startup and
    never mutated afterwards, so readers need no locking.
    """

    def __init__(self, csv_path: Path | None = None) -> None:
        self.csv_path: Path = csv_path or Settings.PRODUCTS_CSV_PATH
        self._products: tuple[Product, ...] = ()
        self._categories: list[str] = []
        self._ready: bool = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    def load(self) -> int:
        """Read the CSV into memory and mark the store ready.

        Returns the number of products retained.  Calling ``load`` on a
        ready store does nothing.

        Raises:
            CatalogLoadError: if the file is missing or unreadable.
        """
        if self._ready:
            logger.warning(
                "Catalog already loaded from %s; reload ignored",
                self.csv_path,
            )
            return len(self._products)

        path = self.csv_path.resolve()
        if not path.is_file():
            raise CatalogLoadError(f"CSV file not found at: {path}")

        try:
            with open(path, newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                raw = [product_from_row(row) for row in reader]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            logger.error(
                "Error reading catalog CSV %s: %s",
                path,
                exc,
                exc_info=True,
            )
            raise CatalogLoadError(
                f"Failed to read CSV file {path}: {exc}"
            ) from exc

        products, _ = ProductValidator.validate(raw)
        self._products = tuple(products)
        self._categories = sorted(
            {p.category for p in products if p.category}
        )
        self._ready = True
        logger.info(
            "Loaded %d products with %d categories from %s",
            len(self._products),
            len(self._categories),
            path,
        )
        return len(self._products)

    def stats(self) -> CatalogStats:
        return CatalogStats(
            total_products=len(self._products),
            categories=len(self._categories),
            discounted_products=sum(
                1 for p in self._products if p.has_discount
            ),
            products_with_variants=sum(
                1 for p in self._products if p.has_variants
            ),
            is_ready=self._ready,
            source_path=str(self.csv_path),
        )
