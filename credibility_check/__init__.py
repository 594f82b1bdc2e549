"""
Credibility Check - LLM-assisted news article credibility assessment.

This package fetches a news article, extracts its body text from
arbitrary HTML, asks a text-completion model for a structured
credibility assessment and parses the reply into typed fields.
Combined checks are cached per URL for the lifetime of the process.

Main entry points are the JSON handlers in ``credibility_check.api``
and the CLI via the `credibility-check` command.

Example:
    $ credibility-check check https://example.com/news/123
"""

__all__ = ["__version__", "CredibilityService", "CredibilityCache"]
__version__ = "0.1.0"

from .cache import CredibilityCache
from .service import CredibilityService
