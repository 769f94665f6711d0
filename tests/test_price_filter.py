# tests/test_price_filter.py

"""Tests for the client-side PriceFilter."""

import unittest

from storefront_search.filters.price_filter import PriceFilter
from storefront_search.models.product import EnrichedProduct


def _make_product(pid: int, price: float) -> EnrichedProduct:
    """Create a minimal EnrichedProduct with the given price."""
    return EnrichedProduct(id=pid, title=f"P{pid}", price=price)


PRODUCTS = [
    _make_product(1, 5.0),
    _make_product(2, 10.0),
    _make_product(3, 50.0),
    _make_product(4, 100.0),
    _make_product(5, 150.0),
]


class TestPriceFilter(unittest.TestCase):
    """PriceFilter.apply behaviour."""

    def test_no_bounds_returns_all(self) -> None:
        """Without bounds nothing is filtered."""
        kept, excluded = PriceFilter.apply(PRODUCTS)
        self.assertEqual(kept, PRODUCTS)
        self.assertEqual(excluded, 0)

    def test_inclusive_range(self) -> None:
        """Bounds are inclusive on both ends."""
        kept, excluded = PriceFilter.apply(PRODUCTS, 10, 100)
        self.assertEqual([p.id for p in kept], [2, 3, 4])
        self.assertEqual(excluded, 2)

    def test_min_only(self) -> None:
        kept, _excluded = PriceFilter.apply(PRODUCTS, price_min=100)
        self.assertEqual([p.id for p in kept], [4, 5])

    def test_max_only(self) -> None:
        kept, _excluded = PriceFilter.apply(PRODUCTS, price_max=10)
        self.assertEqual([p.id for p in kept], [1, 2])

    def test_unpriced_products_dropped_by_min(self) -> None:
        """Products whose join missed (price 0) fall below any minimum."""
        unpriced = [_make_product(9, 0.0)]
        kept, excluded = PriceFilter.apply(unpriced, 1, 10)
        self.assertEqual(kept, [])
        self.assertEqual(excluded, 1)

    def test_empty_list(self) -> None:
        kept, excluded = PriceFilter.apply([], 1, 10)
        self.assertEqual(kept, [])
        self.assertEqual(excluded, 0)


if __name__ == "__main__":
    unittest.main()
