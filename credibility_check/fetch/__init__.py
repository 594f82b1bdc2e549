"""
Article fetching and extraction.

This package handles HTTP fetching and article body extraction.
"""

from .fetcher import FetchResult, fetch_html
from .extractor import extract_article_text, normalize_whitespace, truncate_text

__all__ = [
    "FetchResult",
    "fetch_html",
    "extract_article_text",
    "normalize_whitespace",
    "truncate_text",
]
