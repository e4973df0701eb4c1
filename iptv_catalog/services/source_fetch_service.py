"""
Source Fetcher

Performs a single HTTP GET against an IPTV source and returns the body text.
Every failure is reported as FetchError; there is no retry.
"""
import logging

import httpx

from iptv_catalog.errors import FetchError


logger = logging.getLogger(__name__)


class SourceFetcher:
    """Fetch remote source text through an injected httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch(self, url: str) -> str:
        """
        Download the source document at ``url``

        Args:
            url: Source URL

        Returns:
            Response body decoded as text (empty string for an empty body)

        Raises:
            FetchError: On a non-2xx status or any transport failure
        """
        logger.info(f"Fetching remote source: {url}")

        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            reason = f"{type(e).__name__}: {e}"
            logger.error(f"Failed to fetch remote source {url}: {reason}", exc_info=True)
            raise FetchError(reason) from e

        if not response.is_success:
            reason = f"http status {response.status_code}: {response.reason_phrase}"
            logger.error(f"Failed to fetch remote source {url}: {reason}")
            raise FetchError(reason)

        text = response.text
        logger.info(f"Fetched {len(response.content) / 1024:.1f} KB from {url}")
        return text


def build_http_client(timeout: float, user_agent: str) -> httpx.AsyncClient:
    """Create the shared AsyncClient used for source downloads."""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": user_agent},
    )
