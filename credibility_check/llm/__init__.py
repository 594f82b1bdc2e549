"""Prompt rendering, response parsing and completion providers."""

from .prompts import PromptMode, build_prompt
from .providers.base import CompletionProvider
from .providers.factory import available_providers, create_provider
from .response_parser import parse_response
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "PromptMode",
    "build_prompt",
    "parse_response",
    "CompletionProvider",
    "create_provider",
    "available_providers",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
