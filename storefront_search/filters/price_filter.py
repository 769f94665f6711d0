# storefront_search/filters/price_filter.py

"""Client-side price range filtering of enriched products."""

import logging

from storefront_search.models.product import EnrichedProduct

logger = logging.getLogger("storefront_search.filters")


class PriceFilter:
    """Keep products whose price falls inside an inclusive range."""

    @staticmethod
    def apply(
        products: list[EnrichedProduct],
        price_min: float | None = None,
        price_max: float | None = None,
    ) -> tuple[list[EnrichedProduct], int]:
        """Drop products outside ``[price_min, price_max]``.

        A missing bound is open.  Returns the kept products and the
        count of excluded ones.
        """
        if price_min is None and price_max is None:
            return products, 0

        kept: list[EnrichedProduct] = []
        excluded = 0
        for product in products:
            if price_min is not None and product.price < price_min:
                excluded += 1
            elif price_max is not None and product.price > price_max:
                excluded += 1
            else:
                kept.append(product)

        if excluded:
            logger.info(
                "Price filter removed %d products outside %s-%s",
                excluded,
                price_min,
                price_max,
            )

        return kept, excluded
