"""Abstract interface for text-completion backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ...utils.logging import log_event, redact_text, truncate_text


class CompletionProvider(ABC):
    """Provider interface: one system instruction + one user prompt in, one text reply out.

    Implementations raise CapabilityError when the call itself fails. An
    empty reply is returned as "" and left to the response parser.
    """

    name = "base"

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError(f"Missing API key for provider '{cfg.name}'")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg or LoggingConfig()
        self.llm_logger = llm_logger
        self.transport = transport

    @abstractmethod
    async def complete(self, system_prompt: str, prompt: str, max_tokens: int) -> str:
        """Return the model's reply text."""
        raise NotImplementedError

    async def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = await client.post(url, json=payload, headers=headers, params=params)
            resp.raise_for_status()
            return resp.json()

    def _log_llm_response(self, event: str, status: str, prompt: str, content: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload: dict[str, Any] = {
            "event": event,
            "status": status,
            "provider": self.name,
            "model": self.cfg.model,
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **payload)
