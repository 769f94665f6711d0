# storefront_search/filters/price_parser.py

"""Parse WooCommerce price strings into numbers."""

import html
import re

_NUMBER_RE = re.compile(r"\d*\.?\d+")


def clean_price_text(text: str | None) -> str:
    """Decode entities such as ``&#36;`` in a WPGraphQL price string."""
    if not text:
        return ""
    return html.unescape(text).strip()


def extract_price(text: str | None) -> float:
    """Extract a numeric price from a string like '$1,299.00'.

    Entities are decoded first, so ``&#36;49.50`` yields 49.5, and a
    missing leading zero is allowed (``$.99`` yields 0.99).  Only the
    first number counts: a range such as ``"$10.00 - $20.00"`` yields its
    lower bound.
    """
    cleaned = clean_price_text(text).replace(",", "")
    match = _NUMBER_RE.search(cleaned)
    return float(match.group(0)) if match else 0.0
