from .http_client import AsyncHTTPClient, HTTPResponse
from .markdown import html_to_markdown

__all__ = [
    "AsyncHTTPClient",
    "HTTPResponse",
    "html_to_markdown",
]
