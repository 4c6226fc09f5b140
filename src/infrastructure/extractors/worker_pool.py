"""Bounded pool of reusable page sessions running challenge extractions."""

import asyncio
from typing import Callable, Optional

from loguru import logger

from domain.exceptions import BrowserLaunchError
from domain.models import ChallengeRef
from infrastructure.browser.interception import should_block
from infrastructure.parsers.interfaces import PageSessionProtocol, SessionFactoryProtocol

from .challenge_extractor import ChallengeExtractor, ExtractionOutcome


class PoolClosedError(RuntimeError):
    """A session was requested from a pool that has been closed."""

    pass


class ExtractionWorkerPool:
    """
    Runs extractions on at most ``concurrency`` page sessions at once.

    Sessions are created lazily, configured with request interception once, and
    reused for later submissions. A session whose navigation failed is discarded.
    Failing to open a session aborts only that unit; failing to launch the
    browser is raised.
    """

    def __init__(
        self,
        session_factory: SessionFactoryProtocol,
        concurrency: int = 10,
        navigation_timeout: float = 60.0,
        selector_timeout: float = 30.0,
        converter: Optional[Callable[[str], str]] = None,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        self.session_factory = session_factory
        self.concurrency = concurrency
        self.navigation_timeout = navigation_timeout
        self.selector_timeout = selector_timeout
        self.converter = converter

        self._slots = asyncio.Semaphore(concurrency)
        self._idle: list[PageSessionProtocol] = []
        self._sessions: list[PageSessionProtocol] = []
        self._closed = False

        self.in_flight = 0
        self.peak_in_flight = 0

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    @property
    def closed(self) -> bool:
        return self._closed

    async def submit(self, challenge: ChallengeRef, url: str) -> ExtractionOutcome:
        """
        Extract one challenge, waiting for a free session if all are busy.

        Raises:
            PoolClosedError: If the pool was closed before submission
            BrowserLaunchError: If the browser cannot be started
        """
        if self._closed:
            raise PoolClosedError("Worker pool is closed")

        async with self._slots:
            try:
                session = await self._acquire()
            except BrowserLaunchError:
                raise
            except Exception as e:
                logger.warning(f"No page session for {challenge.name}: {e}")
                return ExtractionOutcome.abort(challenge.name, url)

            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            healthy = False

            try:
                logger.debug(f"Extracting {challenge.name} from {url}")
                extractor = ChallengeExtractor(
                    session,
                    navigation_timeout=self.navigation_timeout,
                    selector_timeout=self.selector_timeout,
                    converter=self.converter,
                )
                outcome = await extractor.extract(challenge, url)
                healthy = not outcome.aborted
                return outcome
            finally:
                self.in_flight -= 1
                if healthy and not self._closed:
                    self._idle.append(session)
                else:
                    await self._discard(session)

    async def _acquire(self) -> PageSessionProtocol:
        if self._closed:
            raise PoolClosedError("Worker pool is closed")
        if self._idle:
            return self._idle.pop()

        session = await self.session_factory.new_session()
        if self._closed:
            await self._discard(session)
            raise PoolClosedError("Worker pool closed while opening a session")

        self._sessions.append(session)
        try:
            await session.intercept_requests(should_block)
        except Exception:
            await self._discard(session)
            raise

        logger.debug(f"Opened page session {len(self._sessions)}")
        return session

    async def _discard(self, session: PageSessionProtocol) -> None:
        if session in self._sessions:
            self._sessions.remove(session)
        try:
            await session.close()
        except Exception as e:
            logger.warning(f"Failed to close page session: {e}")

    async def close(self) -> None:
        """Close every session and the underlying browser."""
        if self._closed:
            return
        self._closed = True

        sessions, self._sessions, self._idle = self._sessions, [], []
        for session in sessions:
            try:
                await session.close()
            except Exception as e:
                logger.warning(f"Failed to close page session: {e}")

        await self.session_factory.close()
        logger.debug(f"Worker pool closed ({len(sessions)} session(s))")
