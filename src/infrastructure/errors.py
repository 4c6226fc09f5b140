"""Errors raised by infrastructure clients."""

from domain.exceptions import KataScraperError


class NetworkError(KataScraperError):
    """Transport-level failure: timeout, DNS, connection reset."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")
