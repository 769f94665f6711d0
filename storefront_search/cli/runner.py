# storefront_search/cli/runner.py

"""Headless CLI search runner built on the async search logic."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from storefront_search.clients.smart_search import WILDCARD
from storefront_search.filters.text_cleaning import html_to_text
from storefront_search.models.product import EnrichedProduct, SearchResponse
from storefront_search.models.search_filters import SearchFilters
from storefront_search.services.search_logic import SearchLogic

logger = logging.getLogger("storefront_search.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(
    products: list[EnrichedProduct],
) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "title": p.title,
            "description": p.description,
            "score": p.score,
            "image": p.image,
            "price": p.price,
            "formatted_price": p.formatted_price,
            "slug": p.slug,
            "is_available": p.is_available,
        }
        for p in products
    ]


def response_to_dict(response: SearchResponse) -> dict[str, object]:
    """Serialise a search envelope, omitting ``error`` on success."""
    data: dict[str, object] = {
        "success": response.success,
        "results": _products_to_dicts(response.results),
        "total": response.total,
        "search_time": response.search_time,
        "query": response.query,
    }
    if response.error is not None:
        data["error"] = response.error
    return data


def _print_table(response: SearchResponse) -> None:
    """Render a Rich table of results to stdout."""
    table = Table(
        title=f"Results for {response.query}" if response.query else "Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", style="dim")
    table.add_column("Title", max_width=40)
    table.add_column("Description", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Stock", justify="center")
    table.add_column("Score", justify="right", style="magenta")

    for idx, p in enumerate(response.results, 1):
        if p.formatted_price:
            price_str = p.formatted_price
        elif p.price > 0:
            price_str = f"${p.price:,.2f}"
        else:
            price_str = "N/A"
        stock = "[green]yes[/green]" if p.is_available else "—"
        table.add_row(
            str(idx),
            str(p.id),
            p.title,
            html_to_text(p.description, max_length=120),
            price_str,
            stock,
            f"{p.score:.2f}",
        )

    Console().print(table)


def option_conflict(
    query: str | None = None,
    activity: str | None = None,
    category: str | None = None,
    price_min: float | None = None,
    price_max: float | None = None,
    context: bool = False,
) -> str | None:
    """Return why the options cannot run together, or None."""
    has_filters = (
        category is not None
        or price_min is not None
        or price_max is not None
    )
    if activity is not None and query is not None:
        return "--activity replaces the query; give one or the other"
    if context and activity is not None:
        return "--context cannot be combined with --activity"
    if context and has_filters:
        return "--context does not support --category or price bounds"
    return None


async def run_search(
    logic: SearchLogic,
    query: str | None = None,
    activity: str | None = None,
    category: str | None = None,
    price_min: float | None = None,
    price_max: float | None = None,
    context: bool = False,
    details: bool = False,
) -> SearchResponse:
    """Pick the search flow that matches the given options."""
    filters = SearchFilters(
        price_min=price_min, price_max=price_max, category=category,
    )

    if activity is not None:
        return await logic.perform_activity_search(activity, filters=filters)
    if context:
        return await logic.perform_context_search(query or "")
    if query is None and category is None and filters.has_price:
        return await logic.perform_price_only_search(price_min, price_max)
    if query is None and not filters.has_price and category is not None:
        return await logic.perform_category_search(category)
    if query is None:
        # Category plus price range
        return await logic.perform_search(WILDCARD, filters=filters, enrich=True)

    return await logic.perform_search(
        query, filters=filters, enrich=details,
    )


async def cli_search(
    query: str | None,
    activity: str | None = None,
    category: str | None = None,
    price_min: float | None = None,
    price_max: float | None = None,
    limit: int | None = None,
    context: bool = False,
    details: bool = False,
    output_format: str = "json",
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=fail)."""
    conflict = option_conflict(
        query, activity, category, price_min, price_max, context,
    )
    if conflict is not None:
        _err.print(f"[red]Error: {conflict}[/red]")
        return 1

    logic = SearchLogic()
    if limit is not None:
        logic.results_limit = limit

    _err.print(
        f"[bold]Searching:[/bold] {query or activity or category or '*'}"
    )

    response = await run_search(
        logic,
        query=query,
        activity=activity,
        category=category,
        price_min=price_min,
        price_max=price_max,
        context=context,
        details=details,
    )

    if not response.success:
        logger.warning("CLI search failed: %s", response.error)
        _err.print(f"[red]Error: {response.error}[/red]")
        return 1

    if not response.results:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(response.results)} products"
        f" of {response.total} ({response.search_time}ms)[/green]"
    )

    if output_format == "table":
        _print_table(response)
    else:
        json.dump(
            response_to_dict(response),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0
