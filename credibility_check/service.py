"""
Pipeline orchestration for the credibility check.

Three operations are exposed:
1. extract_only: fetch a URL and return its normalized article text
2. evaluate_only: run the quick assessment on caller-supplied text
3. check_credibility: fetch, extract, run the full assessment, parse and
   cache the result per URL

Stages run sequentially per request; concurrency comes from the event
loop serving many requests. Nothing is retried.
"""

from __future__ import annotations

import logging

import httpx

from .cache import CredibilityCache, normalize_cache_key
from .config import AppConfig
from .core.types import SCORE_THRESHOLD, CredibilityResult, EvaluationResult
from .errors import (
    CapabilityError,
    CredibilityCheckError,
    ExtractionError,
    FetchError,
    InsufficientContentError,
    ValidationError,
)
from .fetch.extractor import extract_article_text
from .fetch.fetcher import fetch_html
from .llm.prompts import PromptMode, build_prompt
from .llm.providers.base import CompletionProvider
from .llm.response_parser import parse_response
from .llm.tracing import set_span_output, start_span
from .utils.logging import log_event

MISSING_URL_MESSAGE = "URL이 필요합니다."
MISSING_CONTENT_MESSAGE = "기사 내용이 필요합니다."


class CredibilityService:
    """Composes fetcher, extractor, prompt builder, provider, parser and cache.

    The cache is created by the caller and passed in by reference; pass
    ``cache=None`` together with ``cfg.cache.enabled = False`` to disable
    caching entirely.

    Attributes:
        cfg: Application configuration
        provider: Text-completion backend; may be None when only extract_only is used
        cache: Result cache for check_credibility, or None when disabled
        client: Optional shared HTTP client for page fetches
    """

    def __init__(
        self,
        cfg: AppConfig,
        provider: CompletionProvider | None,
        cache: CredibilityCache | None = None,
        logger: logging.Logger | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.cfg = cfg
        self.provider = provider
        if cache is None and cfg.cache.enabled:
            cache = CredibilityCache.from_config(cfg.cache)
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.client = client

    async def extract_only(self, url: str | None) -> str:
        """Fetch a page and return its article text.

        Short text is returned as-is. Any fetch or parse fault is reported
        as a generic ExtractionError.

        Raises:
            ValidationError: If url is missing or blank
            ExtractionError: If the page cannot be fetched or parsed
        """
        url = _require(url, MISSING_URL_MESSAGE, "url")
        try:
            return await self._fetch_and_extract(url)
        except ExtractionError:
            raise
        except FetchError as exc:
            raise ExtractionError(str(exc), original_error=exc) from exc

    async def evaluate_only(self, content: str | None) -> EvaluationResult:
        """Run the quick assessment on caller-supplied article text.

        Raises:
            ValidationError: If content is missing or blank
            CapabilityError: If the completion call fails
        """
        content = _require(content, MISSING_CONTENT_MESSAGE, "content")
        with start_span("credibility.evaluate", kind="chain", input_value={"chars": len(content)}) as span:
            reply = await self._complete(content, PromptMode.QUICK, self.cfg.assessment.quick_max_tokens)
            parsed = parse_response(reply, PromptMode.QUICK)
            result = EvaluationResult(
                credibility_score=parsed.score,
                fake_article_type=parsed.fake_article_type,
                full_response=reply,
            )
            set_span_output(span, {"score": result.credibility_score, "type": result.fake_article_type})

        log_event(
            self.logger,
            "Evaluation complete",
            event="evaluate_complete",
            score=result.credibility_score,
            fake_article_type=result.fake_article_type,
        )
        return result

    async def check_credibility(self, url: str | None) -> CredibilityResult:
        """Run the full pipeline for a URL, serving repeated URLs from the cache.

        Raises:
            ValidationError: If url is missing or blank
            FetchError: If the page cannot be downloaded
            ExtractionError: If the page cannot be parsed
            InsufficientContentError: If the article text is too short to assess
            CapabilityError: If the completion call fails
        """
        url = _require(url, MISSING_URL_MESSAGE, "url")
        if self.cache is None:
            return await self._run_check(url)
        return await self.cache.get_or_compute(url, lambda: self._run_check(url))

    async def _run_check(self, url: str) -> CredibilityResult:
        assessment = self.cfg.assessment
        with start_span(
            "credibility.check",
            kind="chain",
            input_value={"cache_key": normalize_cache_key(url)},
        ) as span:
            log_event(self.logger, "Pipeline start", event="check_start", url=url)

            article_text = await self._fetch_and_extract(url)
            if len(article_text) < assessment.min_content_chars:
                raise InsufficientContentError(
                    f"Extracted {len(article_text)} chars from {url}, "
                    f"need at least {assessment.min_content_chars}"
                )

            reply = await self._complete(article_text, PromptMode.FULL, assessment.full_max_tokens)
            parsed = parse_response(reply, PromptMode.FULL)

            if parsed.score < SCORE_THRESHOLD and len(parsed.reason) < assessment.min_reason_chars:
                self.logger.warning(
                    "Rationale shorter than %d chars (%d) for %s",
                    assessment.min_reason_chars,
                    len(parsed.reason),
                    url,
                )

            result = CredibilityResult(
                credibility_score=parsed.score,
                fake_article_type=parsed.fake_article_type,
                summary=parsed.summary,
                recommendations=parsed.recommendations,
                reason=parsed.reason,
                full_response=reply,
                article_content=_preview(article_text, assessment.preview_chars),
            )
            set_span_output(span, {"score": result.credibility_score, "type": result.fake_article_type})

        log_event(
            self.logger,
            "Pipeline complete",
            event="check_complete",
            url=url,
            score=result.credibility_score,
            fake_article_type=result.fake_article_type,
            keywords=len(result.recommendations),
        )
        return result

    async def _fetch_and_extract(self, url: str) -> str:
        fetched = await fetch_html(url, self.cfg.fetch, client=self.client)
        try:
            text = extract_article_text(fetched.text, self.cfg.extract)
        except CredibilityCheckError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ExtractionError(f"{type(exc).__name__}: {exc}", original_error=exc) from exc
        log_event(
            self.logger,
            "Article extracted",
            event="extract_complete",
            url=url,
            status_code=fetched.status_code,
            chars=len(text),
        )
        return text

    async def _complete(self, article_text: str, mode: PromptMode, max_tokens: int) -> str:
        if self.provider is None:
            raise CapabilityError("No completion provider configured")
        prompt = build_prompt(article_text, mode, min_reason_chars=self.cfg.assessment.min_reason_chars)
        return await self.provider.complete(self.cfg.assessment.system_prompt, prompt, max_tokens)


def _require(value: str | None, message: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {field_name}", public_message=message)
    return value


def _preview(text: str, max_chars: int) -> str:
    """First max_chars characters of the article, always followed by the marker."""
    return text[:max_chars] + "..."
