"""Google Gemini provider."""

from __future__ import annotations

from typing import Any

import httpx

from ...errors import CapabilityError
from ..tracing import record_span_error, set_span_output, start_span
from .base import CompletionProvider


class GeminiProvider(CompletionProvider):
    """Gemini ``generateContent`` backend."""

    name = "gemini"

    async def complete(self, system_prompt: str, prompt: str, max_tokens: int) -> str:
        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        url = f"{self.cfg.base_url.rstrip('/')}/v1beta/models/{self.cfg.model}:generateContent"

        with start_span(
            "gemini.generate_content",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": self.cfg.model,
                "llm.provider": self.name,
                "llm.max_tokens": max_tokens,
            },
        ) as span:
            try:
                data = await self._post_json(url, payload, params={"key": self.api_key})
            except (httpx.HTTPError, ValueError) as exc:
                record_span_error(span, exc)
                self._log_llm_response("llm_completion", "provider_error", prompt, str(exc))
                raise CapabilityError(
                    f"Gemini completion failed: {type(exc).__name__}: {exc}",
                    original_error=exc,
                ) from exc
            content = _extract_text(data)
            set_span_output(span, content)
            self._log_llm_response("llm_completion", "ok", prompt, content)
            return content


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate.

    Thought parts are skipped unless they are the only parts returned.
    """
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    texts = [part.get("text", "") for part in parts if not part.get("thought")]
    if not any(texts):
        texts = [part.get("text", "") for part in parts]
    return "".join(texts)
