"""Tests for logging helpers."""

from __future__ import annotations

import json
import logging

from credibility_check.config import LoggingConfig
from credibility_check.utils.logging import (
    JsonlFormatter,
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)


def test_jsonl_formatter_includes_extra_fields():
    record = logging.LogRecord("credibility_check", logging.INFO, __file__, 1, "checked %s", ("url",), None)
    record.score = 85

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "checked url"
    assert payload["level"] == "INFO"
    assert payload["score"] == 85
    assert "msg" not in payload


def test_redaction_modes():
    text = "source https://news.example.com/a?x=1 end"

    assert redact_text(text, "none") == text
    assert redact_text(text, "redact_content") == ""
    assert redact_text(text, "redact_urls") == "source [REDACTED_URL] end"


def test_truncate_text_marks_cut():
    assert truncate_text("abc", 5) == "abc"
    assert truncate_text("abcdef", 3) == "abc...(truncated)"


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)
    try:
        log_event(logger, "Credibility check complete", url="https://a.example", score=70)
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers = []
        logger.propagate = True

    line = (tmp_path / "run.jsonl").read_text(encoding="utf-8").strip()
    payload = json.loads(line)
    assert payload["message"] == "Credibility check complete"
    assert payload["score"] == 70


def test_llm_logger_requires_flag_and_directory(tmp_path):
    assert setup_llm_logger(LoggingConfig(llm_log_enabled=False), tmp_path) is None
    assert setup_llm_logger(LoggingConfig(llm_log_enabled=True), None) is None
