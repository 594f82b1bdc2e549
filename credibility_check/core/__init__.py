"""
Core domain models and static tables.

This package contains data types that are independent of any
specific pipeline stage.
"""

from .types import (
    ARTICLE_SELECTORS,
    BOILERPLATE_TAGS,
    FAKE_ARTICLE_TYPES,
    NO_TYPE,
    NONE_TEXT,
    ORDINAL_TO_TYPE,
    CredibilityResult,
    EvaluationResult,
    ParsedResponse,
)

__all__ = [
    "ARTICLE_SELECTORS",
    "BOILERPLATE_TAGS",
    "FAKE_ARTICLE_TYPES",
    "NO_TYPE",
    "NONE_TEXT",
    "ORDINAL_TO_TYPE",
    "CredibilityResult",
    "EvaluationResult",
    "ParsedResponse",
]
