"""
JSON request handlers for the three credibility operations.

Each handler takes a CredibilityService and a decoded JSON body and
returns ``(status_code, body)``. A host web framework only has to decode
the request, call ``dispatch`` and encode the body. Error bodies carry a
localized message only; details go to the server log.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from .errors import CredibilityCheckError
from .service import CredibilityService

logger = logging.getLogger(__name__)

EXTRACT_FAILED_MESSAGE = "기사 내용을 추출할 수 없습니다."
EVALUATE_FAILED_MESSAGE = "신뢰도 평가 중 오류가 발생했습니다."
NOT_FOUND_MESSAGE = "요청한 경로를 찾을 수 없습니다."

Response = tuple[int, dict[str, Any]]
Handler = Callable[[CredibilityService, dict[str, Any]], Awaitable[Response]]


async def handle_extract(service: CredibilityService, payload: dict[str, Any]) -> Response:
    """``{url}`` -> ``{content}``."""
    try:
        content = await service.extract_only(_field(payload, "url"))
    except Exception as exc:  # noqa: BLE001
        return _error_response("extract", exc, EXTRACT_FAILED_MESSAGE)
    return 200, {"content": content}


async def handle_evaluate(service: CredibilityService, payload: dict[str, Any]) -> Response:
    """``{content}`` -> ``{credibilityScore, fakeArticleType, fullResponse}``."""
    try:
        result = await service.evaluate_only(_field(payload, "content"))
    except Exception as exc:  # noqa: BLE001
        return _error_response("evaluate", exc, EVALUATE_FAILED_MESSAGE)
    return 200, result.to_dict()


async def handle_check(service: CredibilityService, payload: dict[str, Any]) -> Response:
    """``{url}`` -> full CredibilityResult body."""
    try:
        result = await service.check_credibility(_field(payload, "url"))
    except Exception as exc:  # noqa: BLE001
        return _error_response("check", exc, EVALUATE_FAILED_MESSAGE)
    return 200, result.to_dict()


ROUTES: dict[str, Handler] = {
    "/api/extract-article": handle_extract,
    "/api/evaluate-credibility": handle_evaluate,
    "/api/check-credibility": handle_check,
}


async def dispatch(service: CredibilityService, path: str, payload: dict[str, Any] | None) -> Response:
    """Route a decoded request body to the handler registered for path."""
    handler = ROUTES.get(path)
    if handler is None:
        return 404, {"error": NOT_FOUND_MESSAGE}
    return await handler(service, payload or {})


def _field(payload: dict[str, Any] | None, name: str) -> Any:
    if not isinstance(payload, dict):
        return None
    return payload.get(name)


def _error_response(operation: str, exc: Exception, fallback_message: str) -> Response:
    """Map an exception to a status code and an opaque, localized body."""
    if isinstance(exc, CredibilityCheckError):
        status = exc.status_code
        message = exc.public_message
        if operation == "extract" and status >= 500:
            message = fallback_message
    else:
        status = 500
        message = fallback_message

    if status >= 500:
        logger.exception("Operation %s failed", operation, exc_info=exc)
    else:
        logger.info("Operation %s rejected: %s", operation, exc)
    return status, {"error": message}
