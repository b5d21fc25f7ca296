"""
Device list page fetcher.

Bounded HTTP GET for the source page. Every failure mode (transport error,
timeout, non-2xx status, empty body) surfaces as FetchError so callers can
tell "could not download" apart from "downloaded but found nothing".
"""

from __future__ import annotations

import logging

import httpx

from core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


class FetchError(RuntimeError):
    """The device list page could not be downloaded."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


async def fetch_device_list_html(
    url: str | None = None,
    *,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Fetch the device list page and return its HTML.

    Raises FetchError on failure.
    """
    url = url or settings.device_list_url
    timeout = timeout if timeout is not None else settings.request_timeout

    logger.info("Fetching device list page: %s", url)
    try:
        async with httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch page: {exc}") from exc

    if not response.is_success:
        raise FetchError(
            f"Failed to fetch page: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    html = response.text
    if not html.strip():
        raise FetchError("Received empty response from page", status_code=response.status_code)

    logger.info("Fetched %d bytes from %s", len(response.content), url)
    return html
