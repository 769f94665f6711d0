# storefront_search/filters/text_cleaning.py

"""Turn WordPress post content into plain display text."""

from bs4 import BeautifulSoup


def html_to_text(html: str | None, max_length: int | None = None) -> str:
    """Strip tags and entities, collapse whitespace, optionally truncate."""
    if not html:
        return ""
    text = BeautifulSoup(html, "lxml").get_text(" ", strip=True)
    text = " ".join(text.split())
    if max_length is not None and len(text) > max_length:
        return text[: max(max_length - 1, 0)].rstrip() + "…"
    return text
