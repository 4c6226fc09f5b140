"""Async HTTP client backed by curl_cffi."""

from dataclasses import dataclass

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession
from loguru import logger

from .errors import NetworkError


@dataclass
class HTTPResponse:
    status_code: int
    text: str


class AsyncHTTPClient:
    """Thin async wrapper around a curl_cffi session."""

    def __init__(self, timeout: float = 30.0, impersonate: str = "chrome"):
        """
        Initialize client.

        Args:
            timeout: Request timeout in seconds
            impersonate: Browser fingerprint curl_cffi should present
        """
        self.timeout = timeout
        self.impersonate = impersonate
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession(impersonate=self.impersonate, timeout=self.timeout)
        return self._session

    async def get(self, url: str, headers: dict[str, str] | None = None) -> HTTPResponse:
        """
        Issue a GET request. Non-2xx responses are returned, not raised.

        Raises:
            NetworkError: If the request could not be completed
        """
        logger.debug(f"GET {url}")

        try:
            response = await self._get_session().get(url, headers=headers or {})
        except CurlError as e:
            logger.error(f"GET {url} failed: {e}")
            raise NetworkError(url, str(e)) from e

        return HTTPResponse(status_code=response.status_code, text=response.text)

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        response = await self.get(url)
        return response.text

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
