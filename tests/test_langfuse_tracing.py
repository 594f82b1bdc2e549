"""Tests for Langfuse tracing setup behavior."""

from __future__ import annotations

import sys
import types

from credibility_check.config import LangfuseConfig
from credibility_check.llm import tracing


class _DummySpan:
    def __init__(self, updates: list[dict]):
        self.updates = updates

    def update(self, **kwargs):
        self.updates.append(kwargs)


class _DummySpanContext:
    def __init__(self, span: _DummySpan):
        self.span = span
        self.exited = False

    def __enter__(self):
        return self.span

    def __exit__(self, *exc_info):
        self.exited = True
        return False


def _install_fake_langfuse(monkeypatch, captured: dict, updates: list[dict]):
    class DummyLangfuse:
        def __init__(self, **kwargs):
            captured.update(kwargs)
            self.spans: list[dict] = []
            self.flushed = False

        def start_as_current_span(self, **kwargs):
            self.spans.append(kwargs)
            return _DummySpanContext(_DummySpan(updates))

        def flush(self):
            self.flushed = True

    fake_module = types.SimpleNamespace(Langfuse=DummyLangfuse)
    monkeypatch.setitem(sys.modules, "langfuse", fake_module)


def test_setup_langfuse_reads_keys_and_host_from_env(monkeypatch):
    captured: dict = {}
    _install_fake_langfuse(monkeypatch, captured, [])
    monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-test")
    monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-test")
    monkeypatch.setenv("LANGFUSE_HOST", "https://us.cloud.langfuse.com")

    tracing.setup_langfuse(LangfuseConfig(enabled=True, release="v1"))

    assert captured["public_key"] == "pk-test"
    assert captured["secret_key"] == "sk-test"
    assert captured["host"] == "https://us.cloud.langfuse.com"
    assert captured["release"] == "v1"
    tracing.setup_langfuse(LangfuseConfig(enabled=False))


def test_spans_redact_urls_and_record_errors(monkeypatch):
    updates: list[dict] = []
    _install_fake_langfuse(monkeypatch, {}, updates)

    tracing.setup_langfuse(LangfuseConfig(enabled=True, public_key="pk", secret_key="sk"))
    tracer = tracing._TRACER
    with tracing.start_span(
        "check", kind="chain", input_value="see https://news.example.com/a", attributes={"n": 1, "skip": None}
    ) as span:
        tracing.set_span_output(span, {"score": 80})
        tracing.record_span_error(span, RuntimeError("boom"))
    tracing.flush()

    assert tracer.spans[0]["input"] == "see [REDACTED_URL]"
    assert tracer.spans[0]["metadata"] == {"n": 1, "span.kind": "chain"}
    assert updates[0] == {"output": '{"score": 80}'}
    assert updates[1] == {"level": "ERROR", "status_message": "RuntimeError: boom"}
    assert tracer.flushed
    tracing.setup_langfuse(LangfuseConfig(enabled=False))


def test_setup_langfuse_disables_tracer_when_keys_missing(monkeypatch):
    monkeypatch.delenv("LANGFUSE_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("LANGFUSE_SECRET_KEY", raising=False)

    tracing.setup_langfuse(LangfuseConfig(enabled=True))

    assert tracing._TRACER is None


def test_helpers_are_noops_without_tracer():
    tracing.setup_langfuse(LangfuseConfig(enabled=False))

    with tracing.start_span("check", kind="chain", input_value="x") as span:
        assert span is None
        tracing.set_span_output(span, "out")
        tracing.record_span_error(span, ValueError("x"))
    tracing.flush()
