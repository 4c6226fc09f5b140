"""Parsers and fetchers for external sources."""

from .interfaces import (
    HTTPClientProtocol,
    PageSessionProtocol,
    RequestFilter,
    SessionFactoryProtocol,
)
from .listing_page import ListingPageFetcher

__all__ = [
    "HTTPClientProtocol",
    "ListingPageFetcher",
    "PageSessionProtocol",
    "RequestFilter",
    "SessionFactoryProtocol",
]
