# tests/test_product_filter.py

"""Tests for ProductFilter catalog filters and relevance ordering."""

import unittest

from src.filters.product_filter import ProductFilter
from src.models.product import Product


def _make_product(
    title: str,
    price: str = "10.0 USD",
    category: str = "Technology",
    discount: int = 0,
    variants: str | None = None,
    description: str = "",
) -> Product:
    """Create a minimal Product with the given title."""
    return Product(
        title=title,
        url=f"https://shop.test/{title}",
        price=price,
        category=category,
        discount=discount,
        variants=variants,
        description=description,
    )


class TestByQuery(unittest.TestCase):
    """ProductFilter.by_query behaviour."""

    def test_matches_title_or_description(self) -> None:
        products = [
            _make_product("iPhone 12"),
            _make_product("Galaxy", description="android phone"),
            _make_product("Vase"),
        ]
        kept = ProductFilter.by_query(products, "PHONE")
        self.assertEqual([p.title for p in kept], ["iPhone 12", "Galaxy"])

    def test_blank_query_returns_all(self) -> None:
        products = [_make_product("A"), _make_product("B")]
        self.assertEqual(ProductFilter.by_query(products, "  "), products)


class TestByCategory(unittest.TestCase):
    """ProductFilter.by_category behaviour."""

    def test_case_insensitive_exact(self) -> None:
        products = [
            _make_product("A", category="Technology"),
            _make_product("B", category="Tech"),
            _make_product("C", category="Home"),
        ]
        kept = ProductFilter.by_category(products, "technology")
        self.assertEqual([p.title for p in kept], ["A"])


class TestFlags(unittest.TestCase):
    """Discount and variant filters."""

    def test_by_discount(self) -> None:
        products = [
            _make_product("A", discount=1),
            _make_product("B", discount=0),
        ]
        self.assertEqual(
            [p.title for p in ProductFilter.by_discount(products, True)],
            ["A"],
        )
        self.assertEqual(
            [p.title for p in ProductFilter.by_discount(products, False)],
            ["B"],
        )

    def test_by_variants(self) -> None:
        products = [
            _make_product("A", variants="Red, Blue"),
            _make_product("B"),
        ]
        self.assertEqual(
            [p.title for p in ProductFilter.by_variants(products, True)],
            ["A"],
        )


class TestByPriceRange(unittest.TestCase):
    """Inclusive price bounds on the parsed price."""

    def setUp(self) -> None:
        self.products = [
            _make_product("Cheap", price="5.0 USD"),
            _make_product("Mid", price="50.0 USD"),
            _make_product("Range", price="100.0 - 150.0 USD"),
        ]

    def test_inclusive_bounds(self) -> None:
        kept = ProductFilter.by_price_range(self.products, 5.0, 100.0)
        self.assertEqual(
            [p.title for p in kept], ["Cheap", "Mid", "Range"]
        )

    def test_only_min(self) -> None:
        kept = ProductFilter.by_price_range(self.products, min_price=50.0)
        self.assertEqual([p.title for p in kept], ["Mid", "Range"])

    def test_only_max(self) -> None:
        kept = ProductFilter.by_price_range(self.products, max_price=49.0)
        self.assertEqual([p.title for p in kept], ["Cheap"])


class TestSortByRelevance(unittest.TestCase):
    """Discounted first, then ascending price, stable on ties."""

    def test_ordering(self) -> None:
        products = [
            _make_product("Full 30", price="30 USD"),
            _make_product("Sale 20", price="20 USD", discount=1),
            _make_product("Full 10", price="10 USD"),
            _make_product("Sale 5", price="5 USD", discount=1),
        ]
        ordered = ProductFilter.sort_by_relevance(products)
        self.assertEqual(
            [p.title for p in ordered],
            ["Sale 5", "Sale 20", "Full 10", "Full 30"],
        )

    def test_stable_for_ties(self) -> None:
        products = [
            _make_product("First", price="10 USD"),
            _make_product("Second", price="10 USD"),
        ]
        ordered = ProductFilter.sort_by_relevance(products)
        self.assertEqual([p.title for p in ordered], ["First", "Second"])


if __name__ == "__main__":
    unittest.main()
