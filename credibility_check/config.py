"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: Text-completion provider settings
- FetchConfig: HTTP fetching settings
- ExtractConfig: Article body extraction settings
- AssessmentConfig: Prompt/response limits for the credibility assessment
- CacheConfig: In-memory result cache eviction policy
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml

from .core.types import ARTICLE_SELECTORS


@dataclass
class ProviderConfig:
    """Configuration for the text-completion provider.

    Attributes:
        name: Provider name ("openai", "openai_compatible" or "gemini")
        model: Model identifier (e.g., "gpt-4o-mini")
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        api_key_env: Optional environment variable name containing the API key
        temperature: Sampling temperature; 0 keeps repeated assessments stable
        timeout_seconds: Request timeout for a single completion call
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "openai"
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    api_key: str | None = None
    api_key_env: str | None = None
    temperature: float = 0.0
    timeout_seconds: float = 60.0
    trust_env: bool = True


@dataclass
class FetchConfig:
    """Configuration for HTTP content fetching.

    Attributes:
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        follow_redirects: Whether to follow 3xx responses
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 20.0
    trust_env: bool = True
    follow_redirects: bool = True
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass
class ExtractConfig:
    """Configuration for article body extraction.

    Attributes:
        parser: BeautifulSoup tree builder ("html.parser" or "lxml")
        selectors: CSS selectors tried in priority order
        min_selector_chars: Minimum trimmed text length for a selector match to win
        max_chars: Maximum length of the normalized article text
        truncation_marker: Appended to the text when it is cut at max_chars
    """

    parser: str = "html.parser"
    selectors: list[str] = field(default_factory=lambda: list(ARTICLE_SELECTORS))
    min_selector_chars: int = 100
    max_chars: int = 5000
    truncation_marker: str = "..."


@dataclass
class AssessmentConfig:
    """Configuration for the credibility assessment.

    Attributes:
        system_prompt: System instruction sent with every completion call
        quick_max_tokens: Output token limit for evaluate-only calls
        full_max_tokens: Output token limit for the combined check
        min_content_chars: Shortest article text the combined check accepts
        preview_chars: Length of the article preview stored in results
        min_reason_chars: Rationale length requested from the model when score < 70
    """

    system_prompt: str = (
        "You are a fact-checker that analyzes news articles for credibility. "
        "Always respond in Korean."
    )
    quick_max_tokens: int = 500
    full_max_tokens: int = 1500
    min_content_chars: int = 50
    preview_chars: int = 500
    min_reason_chars: int = 200


@dataclass
class CacheConfig:
    """Configuration for the in-memory result cache.

    Attributes:
        enabled: Whether combined checks are cached at all
        max_entries: Optional size bound; oldest entries are evicted first
        ttl_seconds: Optional time-to-live for cache entries
    """

    enabled: bool = True
    max_entries: int | None = None
    ttl_seconds: float | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "credibility.jsonl"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "redact_urls"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    assessment: AssessmentConfig = field(default_factory=AssessmentConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        provider=ProviderConfig(**data["provider"]),
        fetch=FetchConfig(**data["fetch"]),
        extract=ExtractConfig(**data["extract"]),
        assessment=AssessmentConfig(**data["assessment"]),
        cache=CacheConfig(**data["cache"]),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        return os.getenv(cfg.api_key_env)
    defaults = {
        "gemini": "GOOGLE_API_KEY",
        "openai": "OPENAI_API_KEY",
        "openai_compatible": "OPENAI_API_KEY",
        "openai-compatible": "OPENAI_API_KEY",
    }
    env_name = defaults.get(cfg.name.lower(), "OPENAI_API_KEY")
    return os.getenv(env_name)
