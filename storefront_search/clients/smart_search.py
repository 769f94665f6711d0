# storefront_search/clients/smart_search.py

"""Query builders for Smart Search and the WPGraphQL product endpoint."""

import json
import logging
from typing import Any

from storefront_search.clients.graphql_client import GraphQLClient
from storefront_search.config.settings import Settings
from storefront_search.models.search_filters import SearchFilters

logger = logging.getLogger("storefront_search.smart_search")

WILDCARD = "*"

CONTEXT_QUERY = """query GetContext($message: String!, $field: String!, $minScore: Float!) {
  similarity(input: { nearest: { text: $message, field: $field }, minScore: $minScore }) {
    total
    docs { id data score }
  }
}"""

SEARCH_QUERY_TEMPLATE = """query SearchProducts($query: String!, $limit: Int, $filter: String) {
  find(
    query: $query
    limit: $limit
    filter: $filter
    semanticSearch: { searchBias: %(bias)d, fields: %(fields)s }
  ) {
    total
    documents { id score data }
  }
}"""

PRODUCT_DETAILS_QUERY = """query GetProductDetails($ids: [Int]!) {
  products(where: { include: $ids }) {
    edges {
      node {
        databaseId
        name
        slug
        image { sourceUrl altText }
        ... on ProductWithPricing { regularPrice }
        ... on InventoriedProduct { stockStatus }
      }
    }
  }
}"""


def format_amount(value: float) -> str:
    """Render a price bound without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def build_price_query(
    price_min: float | None, price_max: float | None,
) -> str:
    """Translate a price range into Smart Search range syntax.

    ``price:(>=10 AND <=100)`` for a closed range, ``price:>=10`` or
    ``price:<=100`` for an open one, and ``""`` when neither bound is set.
    """
    if price_min is not None and price_max is not None:
        return (
            f"price:(>={format_amount(price_min)} "
            f"AND <={format_amount(price_max)})"
        )
    if price_min is not None:
        return f"price:>={format_amount(price_min)}"
    if price_max is not None:
        return f"price:<={format_amount(price_max)}"
    return ""


def apply_query_filters(
    search_query: str, filters: SearchFilters | None,
) -> str:
    """Combine the search terms with the price filter, if any."""
    if filters is None or not filters.has_price:
        return search_query
    price_query = build_price_query(filters.price_min, filters.price_max)
    if search_query == WILDCARD:
        return price_query
    return f"{search_query} AND {price_query}"


def build_filter_string(filters: SearchFilters | None) -> str:
    """Return the ``filter`` argument restricting hits to products."""
    base = Settings.PRODUCT_FILTER
    if filters is None or not filters.category:
        return base
    category = filters.category.replace('"', '\\"')
    return f'{base} AND {Settings.CATEGORY_FIELD}:"{category}"'


def build_search_document() -> str:
    """Render the ``find`` query with the configured semantic settings."""
    return SEARCH_QUERY_TEMPLATE % {
        "bias": Settings.SEMANTIC_SEARCH_BIAS,
        "fields": json.dumps(Settings.SEMANTIC_SEARCH_FIELDS),
    }


class SmartSearchClient:
    """Issue search and product-detail queries against both endpoints."""

    def __init__(
        self,
        smart_search_url: str | None = None,
        smart_search_token: str | None = None,
        wordpress_url: str | None = None,
        client: GraphQLClient | None = None,
    ) -> None:
        self.smart_search_url = (
            Settings.SMART_SEARCH_URL
            if smart_search_url is None
            else smart_search_url
        )
        self.smart_search_token = (
            Settings.SMART_SEARCH_TOKEN
            if smart_search_token is None
            else smart_search_token
        )
        self.wordpress_url = (
            Settings.WORDPRESS_URL if wordpress_url is None else wordpress_url
        )
        self.client = client or GraphQLClient()

    def get_context(
        self,
        message: str,
        field: str = Settings.CONTEXT_FIELD,
        min_score: float = Settings.CONTEXT_MIN_SCORE,
    ) -> dict[str, Any]:
        """Run a semantic similarity search for context documents."""
        return self.client.post(
            self.smart_search_url,
            CONTEXT_QUERY,
            {"message": message, "field": field, "minScore": min_score},
            token=self.smart_search_token,
        )

    def search_products(
        self,
        search_query: str,
        limit: int = Settings.DEFAULT_SEARCH_LIMIT,
        filters: SearchFilters | None = None,
    ) -> dict[str, Any]:
        """Search products with optional server-side price/category filters."""
        final_query = apply_query_filters(search_query, filters)
        filter_string = build_filter_string(filters)
        logger.debug(
            "find query='%s' filter='%s' limit=%d",
            final_query,
            filter_string,
            limit,
        )
        return self.client.post(
            self.smart_search_url,
            build_search_document(),
            {"query": final_query, "limit": limit, "filter": filter_string},
            token=self.smart_search_token,
        )

    def get_product_details(self, product_ids: list[int]) -> dict[str, Any]:
        """Fetch image, price and stock fields from WPGraphQL."""
        return self.client.post(
            self.wordpress_url,
            PRODUCT_DETAILS_QUERY,
            {"ids": product_ids},
        )
