"""Playwright-backed page sessions."""

import asyncio
from typing import Any, Optional

from loguru import logger
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Route,
    async_playwright,
)

from domain.exceptions import BrowserLaunchError, BrowserUnavailableError
from infrastructure.parsers.interfaces import RequestFilter


def _ms(seconds: float) -> float:
    return seconds * 1000


class PlaywrightPageSession:
    """A single Playwright page exposing the page session protocol."""

    def __init__(self, page: Page):
        self.page = page

    async def navigate(self, url: str, *, timeout: float, wait_until: str = "networkidle") -> None:
        await self.page.goto(url, timeout=_ms(timeout), wait_until=wait_until)

    async def wait_for_selector(
        self, selector: str, *, timeout: float, state: str = "visible"
    ) -> None:
        await self.page.wait_for_selector(selector, timeout=_ms(timeout), state=state)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def intercept_requests(self, should_block: RequestFilter) -> None:
        async def handle(route: Route) -> None:
            request = route.request
            if should_block(request.resource_type, request.url):
                await route.abort()
            else:
                await route.continue_()

        await self.page.route("**/*", handle)

    async def close(self) -> None:
        try:
            await self.page.close()
        except PlaywrightError as e:
            logger.debug(f"Page already closed: {e}")


class PlaywrightSessionFactory:
    """Launches one headless Chromium and hands out pages from a shared context."""

    def __init__(
        self,
        headless: bool = True,
        user_agent: Optional[str] = None,
        page_timeout: float = 15.0,
    ):
        """
        Initialize factory. The browser is launched on first use.

        Args:
            headless: Run Chromium without a window
            user_agent: User agent for the shared browser context
            page_timeout: Default timeout in seconds for page operations
        """
        self.headless = headless
        self.user_agent = user_agent
        self.page_timeout = page_timeout
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._launch_lock = asyncio.Lock()
        self._closed = False

    async def _ensure_context(self) -> BrowserContext:
        async with self._launch_lock:
            if self._closed:
                raise BrowserUnavailableError("Browser has been closed")
            if self._context is None:
                await self._launch()
            return self._context

    async def _launch(self) -> None:
        logger.info("Launching Chromium for challenge extraction")
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport={"width": 1280, "height": 800},
            )
        except PlaywrightError as e:
            logger.error(f"Failed to launch browser: {e}")
            await self._shutdown()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

    async def new_session(self) -> PlaywrightPageSession:
        context = await self._ensure_context()
        try:
            page = await context.new_page()
        except PlaywrightError as e:
            raise BrowserUnavailableError(f"Failed to open page: {e}") from e

        page.set_default_timeout(_ms(self.page_timeout))
        return PlaywrightPageSession(page)

    async def close(self) -> None:
        """Close the context, browser and driver. Safe to call repeatedly."""
        async with self._launch_lock:
            self._closed = True
            await self._shutdown()

    async def _shutdown(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.debug("Browser closed")
