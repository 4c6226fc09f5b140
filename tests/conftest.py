"""Shared fakes for the page-automation engine."""

import asyncio
from dataclasses import dataclass, field

import pytest

from infrastructure.extractors.challenge_extractor import (
    DESCRIPTION_SELECTOR,
    SOLUTION_EDITOR_SELECTOR,
    TEST_EDITOR_SELECTOR,
)


@dataclass
class FakePage:
    """What a training page renders once loaded."""

    description: str = "<p>Write a function.</p>"
    starting_code: str = "function solve() {}"
    test_code: str = "describe('solve', () => {});"
    slow_selectors: set[str] = field(default_factory=set)
    broken_selectors: set[str] = field(default_factory=set)
    fail_navigation: bool = False
    navigation_delay: float = 0.0


class FakePageSession:
    def __init__(self, factory: "FakeSessionFactory"):
        self.factory = factory
        self.current: FakePage | None = None
        self.visited: list[str] = []
        self.request_filter = None
        self.closed = False

    async def navigate(self, url, *, timeout, wait_until="networkidle"):
        page = self.factory.pages.get(url)
        self.visited.append(url)
        self.factory.navigations.append(url)

        self.factory.active += 1
        self.factory.peak_active = max(self.factory.peak_active, self.factory.active)
        try:
            await asyncio.sleep(page.navigation_delay if page else 0)
        finally:
            self.factory.active -= 1

        if page is None or page.fail_navigation:
            raise RuntimeError(f"net::ERR_CONNECTION_RESET at {url}")
        self.current = page

    async def wait_for_selector(self, selector, *, timeout, state="visible"):
        if selector in self.current.slow_selectors:
            await asyncio.sleep(3600)

    async def evaluate(self, script, arg=None):
        if arg in self.current.broken_selectors:
            raise RuntimeError("Execution context was destroyed")
        return {
            DESCRIPTION_SELECTOR: self.current.description,
            SOLUTION_EDITOR_SELECTOR: self.current.starting_code,
            TEST_EDITOR_SELECTOR: self.current.test_code,
        }[arg]

    async def intercept_requests(self, should_block):
        self.request_filter = should_block

    async def close(self):
        self.closed = True


class FakeSessionFactory:
    def __init__(self, pages: dict[str, FakePage] | None = None):
        self.pages = pages or {}
        self.sessions: list[FakePageSession] = []
        self.navigations: list[str] = []
        self.active = 0
        self.peak_active = 0
        self.closed = False

    async def new_session(self):
        session = FakePageSession(self)
        self.sessions.append(session)
        return session

    async def close(self):
        self.closed = True


@pytest.fixture
def session_factory():
    """Factory with no pages; tests register pages by URL."""
    return FakeSessionFactory()
