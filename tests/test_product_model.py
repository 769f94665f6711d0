# tests/test_product_model.py

"""Tests for the product and envelope dataclasses."""

import unittest

from storefront_search.models.product import (
    EnrichedProduct,
    SearchHit,
    SearchResponse,
)
from storefront_search.models.search_filters import SearchFilters


class TestSearchHit(unittest.TestCase):
    """SearchHit dataclass unit tests."""

    def test_defaults(self) -> None:
        """Only the id is required."""
        hit = SearchHit(id=1)
        self.assertEqual(hit.title, "")
        self.assertEqual(hit.description, "")
        self.assertEqual(hit.score, 0.0)


class TestEnrichedProduct(unittest.TestCase):
    """EnrichedProduct dataclass unit tests."""

    def test_is_a_search_hit(self) -> None:
        self.assertIsInstance(EnrichedProduct(id=1), SearchHit)

    def test_enrichment_defaults(self) -> None:
        """Join fields default to empty/zero values."""
        product = EnrichedProduct(id=1, title="Cap")
        self.assertEqual(product.image, "")
        self.assertEqual(product.price, 0.0)
        self.assertEqual(product.formatted_price, "")
        self.assertEqual(product.slug, "")
        self.assertFalse(product.is_available)

    def test_equality(self) -> None:
        a = EnrichedProduct(id=1, title="A", price=10.0)
        b = EnrichedProduct(id=1, title="A", price=10.0)
        self.assertEqual(a, b)
        self.assertNotEqual(a, EnrichedProduct(id=1, title="A", price=20.0))


class TestSearchResponse(unittest.TestCase):
    """SearchResponse envelope defaults."""

    def test_failure_defaults(self) -> None:
        response = SearchResponse(success=False, error="Empty query")
        self.assertEqual(response.results, [])
        self.assertEqual(response.total, 0)
        self.assertEqual(response.search_time, 0)
        self.assertEqual(response.query, "")

    def test_results_not_shared(self) -> None:
        """Each envelope gets its own results list."""
        a = SearchResponse(success=True)
        b = SearchResponse(success=True)
        a.results.append(EnrichedProduct(id=1))
        self.assertEqual(b.results, [])


class TestSearchFilters(unittest.TestCase):
    """SearchFilters.has_price."""

    def test_has_price(self) -> None:
        self.assertFalse(SearchFilters().has_price)
        self.assertFalse(SearchFilters(category="Running").has_price)
        self.assertTrue(SearchFilters(price_min=0).has_price)
        self.assertTrue(SearchFilters(price_max=10).has_price)


if __name__ == "__main__":
    unittest.main()
