"""
Error types raised by the credibility pipeline.

Every error carries the HTTP status class it maps to and a localized,
user-facing message. Internal detail stays in ``str(exc)`` and the
optional ``original_error`` and is only ever written to server logs.
"""

from __future__ import annotations


class CredibilityCheckError(Exception):
    """Base class for all pipeline errors."""

    status_code = 500
    public_message = "신뢰도 평가 중 오류가 발생했습니다."

    def __init__(
        self,
        message: str,
        public_message: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.original_error = original_error
        if public_message is not None:
            self.public_message = public_message
        super().__init__(message)


class ValidationError(CredibilityCheckError):
    """A required input field is missing or empty."""

    status_code = 400


class FetchError(CredibilityCheckError):
    """The article could not be downloaded (network, timeout or non-2xx)."""

    def __init__(
        self,
        url: str,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        self.url = url
        self.http_status = status_code
        super().__init__(f"[{url}] {message}", original_error=original_error)


class ExtractionError(CredibilityCheckError):
    """The article body could not be extracted from the fetched page."""

    public_message = "기사 내용을 추출할 수 없습니다."


class InsufficientContentError(CredibilityCheckError):
    """The extracted text is too short to be assessed."""

    status_code = 400
    public_message = "기사 본문을 찾을 수 없습니다."


class CapabilityError(CredibilityCheckError):
    """The text-completion provider call failed."""
