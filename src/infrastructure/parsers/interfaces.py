"""Protocol interfaces for external collaborators."""

from typing import Any, Callable, Protocol

from infrastructure.http_client import HTTPResponse

# (resource_type, url) -> True to block the request
RequestFilter = Callable[[str, str], bool]


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get(self, url: str, headers: dict[str, str] | None = None) -> HTTPResponse:
        """Issue a GET request."""
        ...

    async def close(self) -> None:
        ...


class PageSessionProtocol(Protocol):
    """One browser page, reusable across sequential navigations.

    Timeouts are in seconds. Only serializable values cross ``evaluate``.
    """

    async def navigate(self, url: str, *, timeout: float, wait_until: str = "networkidle") -> None:
        """Navigate and wait for the readiness criterion."""
        ...

    async def wait_for_selector(
        self, selector: str, *, timeout: float, state: str = "visible"
    ) -> None:
        """Wait until an element matching selector reaches the given state."""
        ...

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Evaluate a script in the page and return its result."""
        ...

    async def intercept_requests(self, should_block: RequestFilter) -> None:
        """Abort every request for which should_block returns True."""
        ...

    async def close(self) -> None:
        ...


class SessionFactoryProtocol(Protocol):
    """Creates page sessions on a shared browser."""

    async def new_session(self) -> PageSessionProtocol:
        ...

    async def close(self) -> None:
        ...
