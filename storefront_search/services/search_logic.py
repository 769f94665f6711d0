# storefront_search/services/search_logic.py

"""Search flows: build query, call Smart Search, map hits, enrich, wrap."""

import asyncio
import dataclasses
import json
import logging
import time
from typing import Any

from storefront_search.clients.smart_search import (
    WILDCARD,
    SmartSearchClient,
    format_amount,
)
from storefront_search.config.settings import Settings
from storefront_search.filters.price_filter import PriceFilter
from storefront_search.filters.price_parser import (
    clean_price_text,
    extract_price,
)
from storefront_search.models.product import EnrichedProduct, SearchResponse
from storefront_search.models.search_filters import SearchFilters

logger = logging.getLogger("storefront_search.search")

IN_STOCK = "IN_STOCK"


class InvalidSearchResponse(ValueError):
    """Smart Search answered without the expected result node."""


def _document_data(document: dict[str, Any]) -> dict[str, Any]:
    """Return a document's ``data`` payload as a dict."""
    data = document.get("data")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            logger.debug("Unparseable document data: %.100s", data)
            return {}
    return data if isinstance(data, dict) else {}


def map_basic_results(
    documents: list[dict[str, Any]],
) -> list[EnrichedProduct]:
    """Map raw Smart Search documents to display products.

    Image and price stay at their defaults until the products are
    joined against WPGraphQL.
    """
    results: list[EnrichedProduct] = []
    for document in documents:
        data = _document_data(document)
        doc_id = data.get("ID")
        results.append(
            EnrichedProduct(
                id="" if doc_id is None else doc_id,
                title=data.get("post_title") or "",
                description=data.get("post_content") or "",
                score=float(document.get("score") or 0.0),
            )
        )
    return results


def _coerce_id(value: Any) -> int | None:
    """Return *value* as a database ID, or None if it is not numeric."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _result_node(body: dict[str, Any], name: str) -> dict[str, Any]:
    """Pull ``data.<name>`` out of a GraphQL body or raise."""
    data = body.get("data") or {}
    node = data.get(name)
    if not isinstance(node, dict):
        raise InvalidSearchResponse("Invalid search response")
    return node


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _failure(exc: Exception, query: str = "") -> SearchResponse:
    return SearchResponse(
        success=False,
        error=f"Search failed: {str(exc) or 'Please try again.'}",
        query=query,
    )


def price_label(price_min: float | None, price_max: float | None) -> str:
    """Human readable label for a price-only search."""
    if price_min is not None and price_max is not None:
        return (
            f"Price: ${format_amount(price_min)} - "
            f"${format_amount(price_max)}"
        )
    if price_min is not None:
        return f"Price: ${format_amount(price_min)}+"
    return f"Price: up to ${format_amount(price_max or 0)}"


class SearchLogic:
    """Runs the storefront's search flows and returns uniform envelopes."""

    def __init__(
        self,
        client: SmartSearchClient | None = None,
        results_limit: int = Settings.RESULTS_LIMIT,
        client_side_price_filter: bool | None = None,
    ) -> None:
        self.client = client or SmartSearchClient()
        self.results_limit = results_limit
        self.client_side_price_filter = (
            Settings.CLIENT_SIDE_PRICE_FILTER
            if client_side_price_filter is None
            else client_side_price_filter
        )

    # ── Keyword / semantic search ────────────────────────

    async def perform_search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        enrich: bool = False,
    ) -> SearchResponse:
        """Search products by keywords.

        Results carry default image/price values unless *enrich* is set.
        """
        if not query or not query.strip():
            return SearchResponse(success=False, error="Empty query")

        start = time.monotonic()
        try:
            body = await asyncio.to_thread(
                self.client.search_products,
                query,
                int(self.results_limit),
                filters,
            )
            find = _result_node(body, "find")
            results = map_basic_results(find.get("documents") or [])
            if enrich:
                results = await self.fetch_complete_product_data(results)
        except Exception as exc:
            logger.error(
                "Search error for '%s': %s", query, exc, exc_info=True,
            )
            return _failure(exc, query)

        search_time = _elapsed_ms(start)
        logger.info(
            "Search '%s' returned %d results in %dms",
            query,
            len(results),
            search_time,
        )
        return SearchResponse(
            success=True,
            results=results,
            total=int(find.get("total") or 0),
            search_time=search_time,
            query=query,
        )

    async def perform_activity_search(
        self,
        activity_value: str,
        filters: SearchFilters | None = None,
    ) -> SearchResponse:
        """Search using the display label of a selected activity.

        Price and category filters apply to the label search as they
        would to a keyword search.
        """
        if not activity_value or not activity_value.strip():
            return SearchResponse(
                success=False, error="No activity selected",
            )
        label = self.get_activity_label(activity_value)
        return await self.perform_search(label, filters=filters)

    # ── Filter-only searches ─────────────────────────────

    async def perform_price_only_search(
        self,
        price_min: float | None = None,
        price_max: float | None = None,
    ) -> SearchResponse:
        """List products inside a price range.

        The range is embedded into the Smart Search query; the client-side
        filter only runs when enabled in settings.
        """
        if price_min is None and price_max is None:
            return SearchResponse(
                success=False, error="No price range selected",
            )

        label = price_label(price_min, price_max)
        start = time.monotonic()
        try:
            body = await asyncio.to_thread(
                self.client.search_products,
                WILDCARD,
                int(self.results_limit),
                SearchFilters(price_min=price_min, price_max=price_max),
            )
            find = _result_node(body, "find")
            basic = map_basic_results(find.get("documents") or [])
            detailed = await self.fetch_complete_product_data(basic)
        except Exception as exc:
            logger.error(
                "Price search error (%s): %s", label, exc, exc_info=True,
            )
            return _failure(exc, label)

        total = int(find.get("total") or 0)
        if self.client_side_price_filter:
            detailed, excluded = PriceFilter.apply(
                detailed, price_min, price_max,
            )
            if excluded:
                total = len(detailed)

        return SearchResponse(
            success=True,
            results=detailed,
            total=total,
            search_time=_elapsed_ms(start),
            query=label,
        )

    async def perform_category_search(self, category: str) -> SearchResponse:
        """List enriched products from a single category."""
        if not category or not category.strip():
            return SearchResponse(
                success=False, error="No category selected",
            )
        response = await self.perform_search(
            WILDCARD,
            SearchFilters(category=category.strip()),
            enrich=True,
        )
        response.query = f"Category: {category.strip()}"
        return response

    # ── Similarity search ────────────────────────────────

    async def perform_context_search(
        self,
        message: str,
        field: str = Settings.CONTEXT_FIELD,
        min_score: float = Settings.CONTEXT_MIN_SCORE,
    ) -> SearchResponse:
        """Find documents semantically close to *message*."""
        if not message or not message.strip():
            return SearchResponse(success=False, error="Empty query")

        start = time.monotonic()
        try:
            body = await asyncio.to_thread(
                self.client.get_context, message, field, min_score,
            )
            similarity = _result_node(body, "similarity")
            results = map_basic_results(similarity.get("docs") or [])
        except Exception as exc:
            logger.error(
                "Context search error for '%s': %s",
                message,
                exc,
                exc_info=True,
            )
            return _failure(exc, message)

        return SearchResponse(
            success=True,
            results=results,
            total=int(similarity.get("total") or 0),
            search_time=_elapsed_ms(start),
            query=message,
        )

    # ── Enrichment ───────────────────────────────────────

    async def fetch_complete_product_data(
        self, products: list[EnrichedProduct],
    ) -> list[EnrichedProduct]:
        """Attach image, price, slug and stock data from WPGraphQL.

        Products without a matching node keep their defaults.  If the
        lookup fails entirely the input list is returned unchanged.
        """
        if not products:
            return []

        ids = [
            pid
            for pid in (_coerce_id(p.id) for p in products)
            if pid is not None
        ]
        if not ids:
            return products

        try:
            body = await asyncio.to_thread(
                self.client.get_product_details, ids,
            )
        except Exception as exc:
            logger.error(
                "Error fetching product details: %s", exc, exc_info=True,
            )
            return products

        edges = ((body.get("data") or {}).get("products") or {}).get(
            "edges"
        ) or []
        nodes: dict[int, dict[str, Any]] = {}
        for edge in edges:
            node = edge.get("node") if isinstance(edge, dict) else None
            if node and _coerce_id(node.get("databaseId")) is not None:
                nodes[int(node["databaseId"])] = node

        enriched: list[EnrichedProduct] = []
        missed = 0
        for product in products:
            pid = _coerce_id(product.id)
            node = nodes.get(pid) if pid is not None else None
            if node is None:
                missed += 1
                enriched.append(product)
                continue
            image = node.get("image") or {}
            regular_price = node.get("regularPrice") or ""
            enriched.append(
                dataclasses.replace(
                    product,
                    image=image.get("sourceUrl") or "",
                    price=extract_price(regular_price),
                    formatted_price=clean_price_text(regular_price),
                    slug=node.get("slug") or "",
                    is_available=node.get("stockStatus") == IN_STOCK,
                )
            )

        if missed:
            logger.warning(
                "No product details for %d of %d results",
                missed,
                len(products),
            )
        return enriched

    @staticmethod
    def get_activity_label(activity_value: str) -> str:
        """Map an activity value to its label; unknown values pass through."""
        return Settings.ACTIVITY_LABELS.get(activity_value, activity_value)
