"""Plain-text extraction from fetched pages."""

from bs4 import BeautifulSoup

_INVISIBLE = ("script", "style", "noscript", "template")


def strip_html(markup: str) -> str:
    """Reduce an HTML document to its visible text.

    Drops script, style, and similar invisible blocks along with comments,
    decodes entities, and collapses whitespace.

    Args:
        markup: Raw HTML.

    Returns:
        Single-line text.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(_INVISIBLE):
        element.decompose()
    return " ".join(soup.get_text(" ", strip=True).split())
