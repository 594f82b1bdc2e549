"""
HTTP page fetching for article extraction.

Pages are fetched with a single async GET carrying a desktop-browser
User-Agent header. There is no retry: any network failure, timeout or
non-2xx status raises FetchError immediately.

Caller-supplied URLs are fetched server-side without any scheme or host
allow-list.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..config import FetchConfig
from ..errors import FetchError


@dataclass
class FetchResult:
    """Result of a successful HTTP fetch.

    Attributes:
        url: The URL that was requested
        final_url: The URL after redirects
        status_code: HTTP status code of the final response
        text: The decoded response body
    """
    url: str
    final_url: str
    status_code: int
    text: str


async def fetch_html(
    url: str,
    cfg: FetchConfig,
    client: httpx.AsyncClient | None = None,
) -> FetchResult:
    """Fetch a page and return its body text.

    Args:
        url: The URL to fetch
        cfg: Fetch settings (timeout, User-Agent, proxy/redirect handling)
        client: Optional shared client; a short-lived one is created otherwise

    Returns:
        FetchResult with the response body

    Raises:
        FetchError: On network failure, timeout or a non-2xx status
    """
    headers = {"User-Agent": cfg.user_agent}
    if client is not None:
        return await _get(client, url, headers, cfg)

    async with httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        follow_redirects=cfg.follow_redirects,
        trust_env=cfg.trust_env,
    ) as owned_client:
        return await _get(owned_client, url, headers, cfg)


async def _get(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    cfg: FetchConfig,
) -> FetchResult:
    try:
        resp = await client.get(
            url,
            headers=headers,
            timeout=cfg.timeout_seconds,
            follow_redirects=cfg.follow_redirects,
        )
    except httpx.TimeoutException as exc:
        raise FetchError(url, f"TimeoutError: {exc}", original_error=exc) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(url, f"{type(exc).__name__}: {exc}", original_error=exc) from exc

    if not resp.is_success:
        raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)

    return FetchResult(
        url=url,
        final_url=str(resp.url),
        status_code=resp.status_code,
        text=resp.text,
    )
