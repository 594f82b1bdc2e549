"""
Article body extraction from raw HTML.

Extraction runs in two stages:
1. Selector heuristics: an ordered list of article-container selectors is
   tried and the first element with enough text wins (no scoring across
   candidates).
2. Fallback: boilerplate elements (script, style, nav, header, footer,
   aside) are removed and the whole body text is used.

The result is whitespace-normalized and capped at a fixed length.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from ..config import ExtractConfig
from ..core.types import BOILERPLATE_TAGS
from ..errors import ExtractionError

_WHITESPACE_RE = re.compile(r"\s+")


def extract_article_text(html: str, cfg: ExtractConfig) -> str:
    """Extract normalized article text from an HTML document.

    Args:
        html: The raw HTML of the page
        cfg: Extraction settings (selectors, thresholds, length cap)

    Returns:
        Whitespace-normalized text, truncated to cfg.max_chars with
        cfg.truncation_marker appended when cut. May be shorter than
        cfg.min_selector_chars; callers decide whether that is enough.

    Raises:
        ExtractionError: If the document cannot be parsed
    """
    try:
        soup = BeautifulSoup(html or "", cfg.parser)
    except Exception as exc:  # noqa: BLE001
        raise ExtractionError(f"HTML parse failed: {type(exc).__name__}: {exc}", original_error=exc) from exc

    text = _select_article_text(soup, cfg.selectors, cfg.min_selector_chars)
    if text is None:
        text = _fallback_body_text(soup)

    return truncate_text(normalize_whitespace(text), cfg.max_chars, cfg.truncation_marker)


def _select_article_text(soup: BeautifulSoup, selectors: list[str], min_chars: int) -> str | None:
    """Return the text of the first selector match with at least min_chars characters."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element.get_text().strip()
        if len(text) >= min_chars:
            return text
    return None


def _fallback_body_text(soup: BeautifulSoup) -> str:
    """Strip boilerplate from the whole document and return the body text."""
    for tag in soup(list(BOILERPLATE_TAGS)):
        tag.decompose()
    root = soup.body or soup
    return root.get_text().strip()


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to a single space."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_text(text: str, max_chars: int, marker: str = "...") -> str:
    """Cut text to max_chars and append marker if anything was removed."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + marker
