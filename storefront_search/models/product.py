# storefront_search/models/product.py

"""Product data models for inter-module data flow."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SearchHit:
    """A single Smart Search document reduced to its display fields."""

    id: Any
    title: str = ""
    description: str = ""
    score: float = 0.0


@dataclass
class EnrichedProduct(SearchHit):
    """A search hit joined with its WooCommerce product details."""

    image: str = ""
    price: float = 0.0
    formatted_price: str = ""
    slug: str = ""
    is_available: bool = False


@dataclass
class SearchResponse:
    """Uniform envelope returned by every search operation."""

    success: bool
    results: list[EnrichedProduct] = field(
        default_factory=lambda: list[EnrichedProduct]()
    )
    total: int = 0
    search_time: int = 0  # milliseconds
    error: str | None = None
    query: str = ""
