"""
Parser for the model's free-text credibility reply.

The prompt asks for a block of label-prefixed lines:

    기사의 신뢰도 : 35 %
    가짜 기사 유형 : 과장된 제목 기사
    요약 : ...
    추천 검색어 : [키워드1], [키워드2], [키워드3]
    판단 근거 : ...

Replies only approximately follow that template, so each field is matched
on its own and falls back to a default when missing. Parsing never raises.
"""

from __future__ import annotations

import logging
import re

from ..core.types import (
    FAKE_ARTICLE_TYPES,
    NO_TYPE,
    NONE_TEXT,
    ORDINAL_TO_TYPE,
    ParsedResponse,
)
from .prompts import PromptMode

logger = logging.getLogger(__name__)

SCORE_LABEL = "기사의 신뢰도"
TYPE_LABEL = "가짜 기사 유형"
SUMMARY_LABEL = "요약"
KEYWORDS_LABEL = "추천 검색어"
REASON_LABEL = "판단 근거"

MAX_RECOMMENDATIONS = 3

_SCORE_RE = re.compile(rf"{SCORE_LABEL}\s*:\s*(\d+)\s*%")
_QUICK_TYPE_RE = re.compile(rf"{TYPE_LABEL}\s*:\s*(\d+번|{NO_TYPE})")
_FULL_TYPE_RE = re.compile(rf"{TYPE_LABEL}\s*:\s*([^\n]+)")
# Summary continues over following non-empty lines until a sibling label starts a line
_SUMMARY_RE = re.compile(
    rf"{SUMMARY_LABEL}\s*:\s*([^\n]+(?:\n(?!\s*(?:{KEYWORDS_LABEL}|{REASON_LABEL}))[^\n]+)*)"
)
_KEYWORDS_RE = re.compile(rf"{KEYWORDS_LABEL}\s*:\s*([^\n]+)")
_REASON_RE = re.compile(rf"{REASON_LABEL}\s*:\s*(.+)", re.DOTALL)
_ORDINAL_PREFIX_RE = re.compile(r"^\d+번\s*:\s*")
_WRAPPING_CHARS = "\"'“”‘’[]()* "


def parse_response(raw_text: str | None, mode: PromptMode | str) -> ParsedResponse:
    """Extract typed fields from a model reply.

    Args:
        raw_text: The model reply; None or empty yields all defaults
        mode: PromptMode.QUICK parses score and category only,
              PromptMode.FULL also parses summary, keywords and rationale

    Returns:
        ParsedResponse with every field populated (defaults where absent)
    """
    mode = PromptMode(mode)
    text = raw_text or ""
    result = ParsedResponse(score=parse_score(text))

    if mode is PromptMode.QUICK:
        result.fake_article_type = _parse_quick_type(text)
        return result

    result.fake_article_type = _parse_full_type(text)
    result.summary = _first_group(_SUMMARY_RE, text) or NONE_TEXT
    result.recommendations = parse_keywords(_first_group(_KEYWORDS_RE, text))
    result.reason = _first_group(_REASON_RE, text) or NONE_TEXT
    return result


def parse_score(text: str) -> int:
    """Return the first "N %" score after the score label, or 0.

    The value is returned as written; scores above 100 are not clamped.
    """
    match = _SCORE_RE.search(text)
    if not match:
        return 0
    return int(match.group(1))


def _parse_quick_type(text: str) -> str:
    token = _first_group(_QUICK_TYPE_RE, text)
    if not token:
        return NO_TYPE
    return normalize_fake_article_type(token)


def _parse_full_type(text: str) -> str:
    value = _first_group(_FULL_TYPE_RE, text)
    if not value:
        return NO_TYPE
    value = _ORDINAL_PREFIX_RE.sub("", value).strip()
    return normalize_fake_article_type(value)


def normalize_fake_article_type(value: str) -> str:
    """Map a raw category token onto the closed category set.

    Ordinals ("1번") go through ORDINAL_TO_TYPE, exact names are kept,
    otherwise the first category name contained in the value is used.
    Anything unrecognised becomes NO_TYPE.

    Examples:
        >>> normalize_fake_article_type("2번")
        '과장된 제목 기사'
        >>> normalize_fake_article_type('"광고성 기사"')
        '광고성 기사'
        >>> normalize_fake_article_type("5번")
        '유형 없음'
    """
    cleaned = value.strip().strip(_WRAPPING_CHARS).strip()
    if cleaned in ORDINAL_TO_TYPE:
        return ORDINAL_TO_TYPE[cleaned]
    if cleaned == NO_TYPE or cleaned in FAKE_ARTICLE_TYPES:
        return cleaned
    for name in FAKE_ARTICLE_TYPES:
        if name in cleaned:
            return name
    if cleaned and NO_TYPE not in cleaned:
        logger.debug("Unrecognised fake article type %r, using %r", value, NO_TYPE)
    return NO_TYPE


def parse_keywords(line: str | None) -> list[str]:
    """Split a keyword line into at most three trimmed keywords.

    Each token loses a leading "[" and trailing "]"; empty tokens are dropped.
    """
    if not line or line == NONE_TEXT:
        return []
    keywords = []
    for token in line.split(","):
        keyword = token.strip().removeprefix("[").removesuffix("]").strip()
        if keyword:
            keywords.append(keyword)
    return keywords[:MAX_RECOMMENDATIONS]


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1).strip()
