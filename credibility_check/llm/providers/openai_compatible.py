"""OpenAI-compatible chat completions provider."""

from __future__ import annotations

from typing import Any

import httpx

from ...errors import CapabilityError
from ..tracing import record_span_error, set_span_output, start_span
from .base import CompletionProvider


class OpenAICompatibleProvider(CompletionProvider):
    """Provider for any endpoint speaking the OpenAI ``/chat/completions`` API."""

    name = "openai"

    async def complete(self, system_prompt: str, prompt: str, max_tokens: int) -> str:
        payload = {
            "model": self.cfg.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.cfg.temperature,
            "max_tokens": max_tokens,
        }
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}

        with start_span(
            "openai.chat_completion",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": self.cfg.model,
                "llm.provider": self.name,
                "llm.max_tokens": max_tokens,
            },
        ) as span:
            try:
                data = await self._post_json(url, payload, headers=headers)
            except (httpx.HTTPError, ValueError) as exc:
                record_span_error(span, exc)
                self._log_llm_response("llm_completion", "provider_error", prompt, str(exc))
                raise CapabilityError(
                    f"OpenAI-compatible completion failed: {type(exc).__name__}: {exc}",
                    original_error=exc,
                ) from exc
            content = _extract_text(data)
            set_span_output(span, content)
            self._log_llm_response("llm_completion", "ok", prompt, content)
            return content


def _extract_text(data: dict[str, Any]) -> str:
    """Return the first choice's message content, or "" when absent."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content or ""
