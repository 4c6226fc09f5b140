"""Fetcher for the kata search listing page."""

from typing import Callable, Optional

from loguru import logger

from domain.exceptions import ListingFetchError
from domain.models import ListingResult
from infrastructure.errors import NetworkError
from infrastructure.markdown import html_to_markdown

from .interfaces import HTTPClientProtocol


class ListingPageFetcher:
    """Fetches a search listing and normalizes it to markdown text."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        user_agent: str = "Mozilla/5.0 (compatible; Bot)",
        converter: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize fetcher.

        Args:
            http_client: Async HTTP client instance
            user_agent: Client identifier sent with the request
            converter: HTML to text function (defaults to markdown conversion)
        """
        self.http_client = http_client
        self.user_agent = user_agent
        self.converter = converter or html_to_markdown

    async def fetch(self, url: str) -> ListingResult:
        """
        Fetch the listing page once. No retry is attempted.

        Raises:
            ListingFetchError: If the transport fails
        """
        logger.info(f"Fetching kata listing: {url}")

        headers = {
            "Accept": "text/html",
            "User-Agent": self.user_agent,
        }

        try:
            response = await self.http_client.get(url, headers=headers)
        except NetworkError as e:
            logger.error(f"Failed to fetch kata listing: {e}")
            raise ListingFetchError(url, str(e)) from e

        if response.status_code >= 400:
            logger.warning(f"Kata listing returned HTTP {response.status_code}")

        result = ListingResult(
            status_code=response.status_code,
            raw_body=response.text,
            normalized_text=self.converter(response.text),
        )

        logger.debug(f"Fetched listing ({len(result.raw_body)} bytes)")
        return result

    async def close(self) -> None:
        await self.http_client.close()
