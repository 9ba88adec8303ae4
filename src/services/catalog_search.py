# src/services/catalog_search.py

"""Structured product search over the in-memory catalog."""

import logging
from dataclasses import asdict, dataclass, field

from src.config.settings import Settings
from src.filters.product_filter import ProductFilter
from src.models.errors import CatalogNotReadyError
from src.models.product import Product
from src.storage.catalog_store import CatalogStore

logger = logging.getLogger("shop_assistant.search")


@dataclass(frozen=True)
class ProductSearchCriteria:
    """Search parameters; ``None`` means "do not filter on this"."""

    query: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    has_discount: bool | None = None
    has_variants: bool | None = None
    limit: int | None = None
    offset: int | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass
class ProductSearchResult:
    """One page of matches plus the pre-pagination total."""

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    total: int = 0
    has_more: bool = False


class CatalogSearchEngine:
    """Answers search requests against a loaded :class:`CatalogStore`.

    Every public method raises :class:`CatalogNotReadyError` until the
    store has been loaded.  That only happens when startup ran out of
    order, so callers must not retry.
    """

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def _require_ready(self) -> list[Product]:
        if not self.store.is_ready:
            raise CatalogNotReadyError("Product catalog not initialized")
        return list(self.store.products)

    # ── Main search ──────────────────────────────────────

    def search(
        self, criteria: ProductSearchCriteria,
    ) -> ProductSearchResult:
        """Filter, order and paginate the catalog.

        Filters are ANDed.  Ordering (discounted first, then cheapest)
        is applied before slicing, so pages are consistent across calls.
        """
        products = self._require_ready()

        if criteria.query and criteria.query.strip():
            products = ProductFilter.by_query(products, criteria.query)
        if criteria.category and criteria.category.strip():
            products = ProductFilter.by_category(
                products, criteria.category
            )
        if criteria.has_discount is not None:
            products = ProductFilter.by_discount(
                products, criteria.has_discount
            )
        if criteria.has_variants is not None:
            products = ProductFilter.by_variants(
                products, criteria.has_variants
            )
        if criteria.min_price is not None or criteria.max_price is not None:
            products = ProductFilter.by_price_range(
                products, criteria.min_price, criteria.max_price
            )

        ordered = ProductFilter.sort_by_relevance(products)

        limit = criteria.limit
        if limit is None or limit <= 0:
            limit = Settings.DEFAULT_SEARCH_LIMIT
        offset = max(criteria.offset or 0, 0)

        total = len(ordered)
        page = ordered[offset:offset + limit]
        logger.debug(
            "Search %s matched %d products (page %d-%d)",
            criteria,
            total,
            offset,
            offset + len(page),
        )
        return ProductSearchResult(
            products=page,
            total=total,
            has_more=offset + limit < total,
        )

    # ── Auxiliary lookups ────────────────────────────────

    def find_by_title(self, title: str) -> Product | None:
        """Case-insensitive exact title lookup."""
        wanted = title.strip().lower()
        for product in self._require_ready():
            if product.title.lower() == wanted:
                return product
        return None

    def find_by_url(self, url: str) -> Product | None:
        wanted = url.strip()
        for product in self._require_ready():
            if product.url == wanted:
                return product
        return None

    def get_categories(self) -> list[str]:
        self._require_ready()
        return self.store.categories

    def get_discounted(self, limit: int = 10) -> list[Product]:
        products = ProductFilter.by_discount(self._require_ready(), True)
        return ProductFilter.sort_by_relevance(products)[:limit]

    def get_by_price_range(
        self, min_price: float, max_price: float,
    ) -> list[Product]:
        products = ProductFilter.by_price_range(
            self._require_ready(), min_price, max_price
        )
        return ProductFilter.sort_by_relevance(products)

    def search_descriptions(
        self, query: str, limit: int = 10,
    ) -> list[Product]:
        """Match on description text only.

        Products whose title also contains the term rank first; the
        usual discount/price ordering breaks ties.
        """
        term = query.strip().lower()
        matches = [
            p
            for p in self._require_ready()
            if term in p.description.lower()
        ]
        ordered = ProductFilter.sort_by_relevance(matches)
        # Stable sort keeps the relevance order inside each group
        ordered.sort(key=lambda p: term not in p.title.lower())
        return ordered[:limit]
