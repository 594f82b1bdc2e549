"""
Core data types and static tables for the credibility pipeline.

This module defines the fundamental data structures used throughout the pipeline:
- ParsedResponse: Fields recovered from the model's free-text reply
- EvaluationResult: Output of the evaluate-only operation
- CredibilityResult: Output of the combined check, stored in the cache

and the fixed tables shared by the extractor, prompt builder and parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# Category label used when the score is 70 or higher, or nothing matched
NO_TYPE = "유형 없음"
# Placeholder for absent free-text fields
NONE_TEXT = "없음"

FAKE_ARTICLE_TYPES: tuple[str, ...] = (
    "허위 사실 포함 기사",
    "과장된 제목 기사",
    "조작된 이미지 포함 기사",
    "광고성 기사",
)

ORDINAL_TO_TYPE: dict[str, str] = {
    f"{idx}번": name for idx, name in enumerate(FAKE_ARTICLE_TYPES, start=1)
}

FAKE_ARTICLE_TYPE_DESCRIPTIONS: dict[str, str] = {
    "허위 사실 포함 기사": "기사 내용에 검증되지 않은 사실이나 거짓 정보가 포함된 경우",
    "과장된 제목 기사": "제목이 본문 내용을 과장하거나 왜곡하여 표현한 경우",
    "조작된 이미지 포함 기사": "이미지가 조작되었거나 본문과 관련 없는 이미지를 사용한 경우",
    "광고성 기사": "명확한 광고 목적이 있거나 상업적 이익을 추구하는 내용이 주된 경우",
}

POSITIVE_MARKERS: tuple[str, ...] = ("신뢰할 수 있다", "출처 명확", "팩트 기반", "공식 기관 인용")
NEGATIVE_MARKERS: tuple[str, ...] = ("불확실", "출처 없음", "충격적인", "믿기지 않는", "광고 링크 포함")

# Scores below this threshold get a fake-article category and a rationale
SCORE_THRESHOLD = 70

ARTICLE_SELECTORS: tuple[str, ...] = (
    "article",
    ".article-body",
    ".article-content",
    ".post-content",
    "#article-body",
    "main article",
    ".news-body",
    ".content",
    ".article-text",
    ".entry-content",
    ".post-body",
)

BOILERPLATE_TAGS: tuple[str, ...] = ("script", "style", "nav", "header", "footer", "aside")


@dataclass
class ParsedResponse:
    """Fields extracted from a model reply.

    Every field has a default so a malformed reply still produces a
    complete object.

    Attributes:
        score: Credibility score as written by the model (not clamped)
        fake_article_type: One of FAKE_ARTICLE_TYPES or NO_TYPE
        summary: Multi-line summary text, or NONE_TEXT
        recommendations: Up to three search keywords
        reason: Rationale text, or NONE_TEXT
    """
    score: int = 0
    fake_article_type: str = NO_TYPE
    summary: str = NONE_TEXT
    recommendations: list[str] = field(default_factory=list)
    reason: str = NONE_TEXT


@dataclass
class EvaluationResult:
    """Result of assessing caller-supplied article text."""
    credibility_score: int
    fake_article_type: str
    full_response: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "credibilityScore": self.credibility_score,
            "fakeArticleType": self.fake_article_type,
            "fullResponse": self.full_response,
        }


@dataclass
class CredibilityResult:
    """Result of the combined fetch, extract and assess pipeline.

    Attributes:
        credibility_score: Integer score, 0 when the reply had none
        fake_article_type: One of FAKE_ARTICLE_TYPES or NO_TYPE
        summary: Article summary, or NONE_TEXT
        recommendations: Ordered search keywords (at most three)
        reason: Rationale for low scores, or NONE_TEXT
        full_response: The raw model reply
        article_content: Preview of the extracted article text
    """
    credibility_score: int
    fake_article_type: str
    summary: str
    recommendations: list[str]
    reason: str
    full_response: str
    article_content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "credibilityScore": self.credibility_score,
            "fakeArticleType": self.fake_article_type,
            "summary": self.summary,
            "recommendations": list(self.recommendations),
            "reason": self.reason,
            "fullResponse": self.full_response,
            "articleContent": self.article_content,
        }
