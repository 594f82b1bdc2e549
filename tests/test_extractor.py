"""Tests for selector-based article extraction and the boilerplate fallback."""

from __future__ import annotations

import pytest

from credibility_check.config import ExtractConfig
from credibility_check.fetch.extractor import (
    extract_article_text,
    normalize_whitespace,
    truncate_text,
)


LONG_BODY = "정부는 오늘 공식 발표를 통해 새로운 교육 정책을 공개했다. " * 5


def test_article_tag_wins_when_long_enough():
    html = f"""
    <html><body>
      <nav>메뉴 홈 정치 경제</nav>
      <article>
        <h1>제목</h1>
        <p>{LONG_BODY}</p>
      </article>
      <footer>저작권</footer>
    </body></html>
    """

    text = extract_article_text(html, ExtractConfig())

    assert text == normalize_whitespace(f"제목 {LONG_BODY}")
    assert "메뉴" not in text
    assert "저작권" not in text


def test_first_sufficient_selector_wins_over_later_ones():
    html = f"""
    <html><body>
      <div class="article-body">{LONG_BODY}</div>
      <div class="content">{LONG_BODY} 추가 문장이 더 길다. {LONG_BODY}</div>
    </body></html>
    """

    text = extract_article_text(html, ExtractConfig())

    assert text == normalize_whitespace(LONG_BODY)


def test_short_selector_match_is_skipped_for_next_selector():
    html = f"""
    <html><body>
      <article>짧은 글</article>
      <div class="post-content">{LONG_BODY}</div>
    </body></html>
    """

    text = extract_article_text(html, ExtractConfig())

    assert text == normalize_whitespace(LONG_BODY)


def test_selector_match_of_exactly_min_length_is_accepted():
    exact = "가" * 100
    html = f"""
    <html><body>
      <article>{exact}</article>
      <div class="content">{LONG_BODY}</div>
    </body></html>
    """

    assert extract_article_text(html, ExtractConfig()) == exact


def test_only_first_matching_element_of_a_selector_is_considered():
    html = f"""
    <html><body>
      <div class="news-body">짧음</div>
      <div class="news-body">{LONG_BODY}</div>
    </body></html>
    """

    text = extract_article_text(html, ExtractConfig(selectors=[".news-body"]))

    # The second .news-body is never looked at; the fallback uses the whole body
    assert text == normalize_whitespace(f"짧음 {LONG_BODY}")


def test_fallback_strips_boilerplate_and_uses_body_text():
    html = """
    <html>
      <head><title>페이지 제목</title><style>.x { color: red; }</style></head>
      <body>
        <header>사이트 헤더</header>
        <nav>내비게이션</nav>
        <script>var tracking = 1;</script>
        <div id="main">
          <p>본문 첫 문장.</p>
          <p>본문 둘째 문장.</p>
        </div>
        <aside>관련 기사</aside>
        <footer>푸터</footer>
      </body>
    </html>
    """

    text = extract_article_text(html, ExtractConfig())

    assert text == "본문 첫 문장. 본문 둘째 문장."


def test_fallback_without_body_uses_whole_document():
    text = extract_article_text("<div>본문 <script>x()</script>만 있음</div>", ExtractConfig())

    assert text == "본문 만 있음"


def test_whitespace_is_collapsed():
    html = "<html><body><p>첫 줄\n\n\n둘째\t\t줄   셋째</p></body></html>"

    assert extract_article_text(html, ExtractConfig()) == "첫 줄 둘째 줄 셋째"


def test_long_text_is_truncated_with_marker():
    html = f"<html><body><article>{'가' * 6000}</article></body></html>"

    text = extract_article_text(html, ExtractConfig())

    assert len(text) == 5003
    assert text.endswith("...")
    assert text[:5000] == "가" * 5000


def test_text_at_exact_limit_is_not_marked():
    html = f"<html><body><article>{'a' * 5000}</article></body></html>"

    assert extract_article_text(html, ExtractConfig()) == "a" * 5000


def test_short_page_is_returned_not_rejected():
    html = "<html><body><article>Short</article></body></html>"

    assert extract_article_text(html, ExtractConfig()) == "Short"


def test_empty_document_returns_empty_string():
    assert extract_article_text("", ExtractConfig()) == ""


@pytest.mark.parametrize(
    ("text", "limit", "expected"),
    [
        ("abc", 5, "abc"),
        ("abcdef", 3, "abc..."),
    ],
)
def test_truncate_text(text, limit, expected):
    assert truncate_text(text, limit) == expected
