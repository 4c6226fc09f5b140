"""Pure parsers and URL builders."""

from .listing_parser import ListingParser
from .url_builder import URLBuilder, build_search_url

__all__ = ["ListingParser", "URLBuilder", "build_search_url"]
