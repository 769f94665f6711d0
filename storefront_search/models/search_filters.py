# storefront_search/models/search_filters.py

"""Optional filters attached to a Smart Search request."""

from dataclasses import dataclass


@dataclass
class SearchFilters:
    """Price range and category constraints for a product search."""

    price_min: float | None = None
    price_max: float | None = None
    category: str | None = None

    @property
    def has_price(self) -> bool:
        """True when at least one price bound is set."""
        return self.price_min is not None or self.price_max is not None
