"""Tests for parsing free-text model replies into typed fields."""

from __future__ import annotations

import pytest

from credibility_check.core.types import FAKE_ARTICLE_TYPES, NO_TYPE, NONE_TEXT
from credibility_check.llm.prompts import PromptMode
from credibility_check.llm.response_parser import (
    normalize_fake_article_type,
    parse_keywords,
    parse_response,
)


FULL_REPLY = """기사의 신뢰도 : 40 %
가짜 기사 유형 : 과장된 제목 기사
요약 : 정부가 새 정책을 발표했다.
정책은 내년부터 시행된다.
추천 검색어 : [교육부 발표], [신규 교육 정책], [정책 시행일]
판단 근거 : 기사 제목은 '충격적인 변화'라고 표현했으나 본문은 단순한 일정 안내에 불과하다.
출처로 언급된 관계자의 이름과 소속이 명시되지 않았다."""


def test_full_reply_is_parsed_into_all_fields():
    parsed = parse_response(FULL_REPLY, PromptMode.FULL)

    assert parsed.score == 40
    assert parsed.fake_article_type == "과장된 제목 기사"
    assert parsed.summary == "정부가 새 정책을 발표했다.\n정책은 내년부터 시행된다."
    assert parsed.recommendations == ["교육부 발표", "신규 교육 정책", "정책 시행일"]
    assert parsed.reason.startswith("기사 제목은")
    assert parsed.reason.endswith("명시되지 않았다.")
    assert "\n" in parsed.reason


def test_missing_keywords_line_yields_empty_recommendations():
    reply = "기사의 신뢰도 : 80 %\n가짜 기사 유형 : 유형 없음\n요약 : 요약 문장.\n판단 근거 : 없음"

    parsed = parse_response(reply, PromptMode.FULL)

    assert parsed.recommendations == []
    assert parsed.summary == "요약 문장."
    assert parsed.reason == NONE_TEXT


def test_quick_ordinal_maps_to_category_name():
    parsed = parse_response("기사의 신뢰도 : 20 %\n가짜 기사 유형 : 1번", PromptMode.QUICK)

    assert parsed.score == 20
    assert parsed.fake_article_type == FAKE_ARTICLE_TYPES[0]
    assert parsed.fake_article_type != "1번"


def test_quick_no_type_marker():
    parsed = parse_response("기사의 신뢰도 : 90 %\n가짜 기사 유형 : 유형 없음", PromptMode.QUICK)

    assert parsed.fake_article_type == NO_TYPE


def test_quick_mode_leaves_full_only_fields_at_defaults():
    parsed = parse_response(FULL_REPLY, PromptMode.QUICK)

    assert parsed.score == 40
    assert parsed.summary == NONE_TEXT
    assert parsed.recommendations == []
    assert parsed.reason == NONE_TEXT


def test_full_mode_strips_ordinal_prefix():
    reply = "기사의 신뢰도 : 30 %\n가짜 기사 유형 : 4번: 광고성 기사\n"

    assert parse_response(reply, PromptMode.FULL).fake_article_type == "광고성 기사"


def test_full_mode_maps_bare_ordinal():
    reply = "기사의 신뢰도 : 30 %\n가짜 기사 유형 : 3번\n"

    assert parse_response(reply, PromptMode.FULL).fake_article_type == "조작된 이미지 포함 기사"


def test_score_above_100_is_passed_through_unclamped():
    parsed = parse_response("기사의 신뢰도 : 150%", PromptMode.QUICK)

    assert parsed.score == 150


def test_score_tolerates_whitespace_variance():
    parsed = parse_response("기사의 신뢰도:75 %", PromptMode.QUICK)

    assert parsed.score == 75


def test_relabelled_score_is_not_matched():
    parsed = parse_response("신뢰도 점수 : 75 %", PromptMode.QUICK)

    assert parsed.score == 0


@pytest.mark.parametrize("reply", [None, "", "모델이 형식을 따르지 않았습니다."])
def test_malformed_reply_degrades_to_defaults(reply):
    parsed = parse_response(reply, PromptMode.FULL)

    assert parsed.score == 0
    assert parsed.fake_article_type == NO_TYPE
    assert parsed.summary == NONE_TEXT
    assert parsed.recommendations == []
    assert parsed.reason == NONE_TEXT


def test_summary_stops_at_reason_label_when_keywords_missing():
    reply = "요약 : 첫 줄\n둘째 줄\n판단 근거 : 근거 내용"

    parsed = parse_response(reply, PromptMode.FULL)

    assert parsed.summary == "첫 줄\n둘째 줄"
    assert parsed.reason == "근거 내용"


def test_summary_stops_at_indented_labels():
    reply = "기사의 신뢰도 : 80 %\n요약 : 첫 줄\n  추천 검색어 : a, b, c\n  판단 근거 : 이유"

    parsed = parse_response(reply, PromptMode.FULL)

    assert parsed.summary == "첫 줄"
    assert parsed.recommendations == ["a", "b", "c"]
    assert parsed.reason == "이유"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("[a], [b], [c]", ["a", "b", "c"]),
        ("a, b , c", ["a", "b", "c"]),
        ("[a], [b], [c], [d]", ["a", "b", "c"]),
        ("[a], , [b]", ["a", "b"]),
        ("없음", []),
        (None, []),
    ],
)
def test_parse_keywords(line, expected):
    assert parse_keywords(line) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2번", "과장된 제목 기사"),
        ('"허위 사실 포함 기사"', "허위 사실 포함 기사"),
        ("[광고성 기사]", "광고성 기사"),
        ("조작된 이미지 포함 기사 (이미지 출처 불명)", "조작된 이미지 포함 기사"),
        ("유형 없음", NO_TYPE),
        ("5번", NO_TYPE),
        ("알 수 없는 유형", NO_TYPE),
    ],
)
def test_normalize_fake_article_type_stays_in_closed_set(value, expected):
    assert normalize_fake_article_type(value) == expected
