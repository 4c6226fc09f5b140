"""Extraction of description, starting code and tests from one training page."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from loguru import logger

from domain.models import ChallengeArtifacts, ChallengeRef
from infrastructure.markdown import html_to_markdown
from infrastructure.parsers.interfaces import PageSessionProtocol


class ExtractionStage(str, Enum):
    NAVIGATING = "navigating"
    WAITING_FOR_DESCRIPTION = "waiting_for_description"
    WAITING_FOR_SOLUTION_EDITOR = "waiting_for_solution_editor"
    WAITING_FOR_TEST_EDITOR = "waiting_for_test_editor"
    DONE = "done"
    ABORTED = "aborted"


DESCRIPTION_SELECTOR = '.markdown[id="description"]'
SOLUTION_EDITOR_SELECTOR = "#code_container #code .CodeMirror"
TEST_EDITOR_SELECTOR = "#fixture_container #fixture .CodeMirror"

INNER_HTML_SCRIPT = """(selector) => {
    const el = document.querySelector(selector);
    return el ? el.innerHTML : '';
}"""

# CodeMirror attaches its editor instance to the mount element
EDITOR_VALUE_SCRIPT = """(selector) => {
    const el = document.querySelector(selector);
    const editor = el && el.CodeMirror;
    return editor ? (editor.getValue() || '') : '';
}"""


@dataclass
class ExtractionOutcome:
    """Result of one unit of work, including the states it passed through."""

    name: str
    artifacts: ChallengeArtifacts
    stage: ExtractionStage
    history: list[ExtractionStage] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.stage is ExtractionStage.ABORTED

    @classmethod
    def abort(cls, name: str, url: str) -> "ExtractionOutcome":
        """Outcome for a unit that never got a page session."""
        return cls(
            name=name,
            artifacts=ChallengeArtifacts(url=url),
            stage=ExtractionStage.ABORTED,
            history=[ExtractionStage.ABORTED],
        )


class ChallengeExtractor:
    """
    Runs the extraction state machine on one page session.

    Stages run in order: navigate, then wait for the description panel, the
    solution editor and the test editor. A timeout or error in a waiting stage
    leaves that field empty and moves on; only a failed navigation aborts.
    """

    def __init__(
        self,
        session: PageSessionProtocol,
        navigation_timeout: float = 60.0,
        selector_timeout: float = 30.0,
        converter: Optional[Callable[[str], str]] = None,
    ):
        self.session = session
        self.navigation_timeout = navigation_timeout
        self.selector_timeout = selector_timeout
        self.converter = converter or html_to_markdown

    async def extract(self, challenge: ChallengeRef, url: str) -> ExtractionOutcome:
        artifacts = ChallengeArtifacts(url=url)
        outcome = ExtractionOutcome(
            name=challenge.name, artifacts=artifacts, stage=ExtractionStage.NAVIGATING
        )

        self._enter(outcome, ExtractionStage.NAVIGATING)
        if not await self.navigate(url):
            self._enter(outcome, ExtractionStage.ABORTED)
            return outcome

        self._enter(outcome, ExtractionStage.WAITING_FOR_DESCRIPTION)
        artifacts.description = await self.read_description(url)

        self._enter(outcome, ExtractionStage.WAITING_FOR_SOLUTION_EDITOR)
        artifacts.starting_code = await self.read_editor(url, SOLUTION_EDITOR_SELECTOR)

        self._enter(outcome, ExtractionStage.WAITING_FOR_TEST_EDITOR)
        artifacts.test_code = await self.read_editor(url, TEST_EDITOR_SELECTOR)

        self._enter(outcome, ExtractionStage.DONE)
        return outcome

    def _enter(self, outcome: ExtractionOutcome, stage: ExtractionStage) -> None:
        outcome.stage = stage
        outcome.history.append(stage)

    async def navigate(self, url: str) -> bool:
        """Load the training page; False when it never became ready."""
        try:
            await asyncio.wait_for(
                self.session.navigate(url, timeout=self.navigation_timeout, wait_until="networkidle"),
                timeout=self.navigation_timeout,
            )
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Navigation to {url} timed out after {self.navigation_timeout}s")
            return False
        except Exception as e:
            logger.warning(f"Navigation to {url} failed: {e}")
            return False

    async def read_description(self, url: str) -> str:
        html = await self._wait_and_read(url, DESCRIPTION_SELECTOR, INNER_HTML_SCRIPT)
        return self.converter(html) if html else ""

    async def read_editor(self, url: str, selector: str) -> str:
        return await self._wait_and_read(url, selector, EDITOR_VALUE_SCRIPT)

    async def _wait_and_read(self, url: str, selector: str, script: str) -> str:
        async def wait_then_evaluate() -> str:
            await self.session.wait_for_selector(selector, timeout=self.selector_timeout)
            value = await self.session.evaluate(script, selector)
            return value if isinstance(value, str) else ""

        return await self._bounded(url, selector, wait_then_evaluate)

    async def _bounded(
        self, url: str, selector: str, step: Callable[[], Awaitable[str]]
    ) -> str:
        try:
            return await asyncio.wait_for(step(), timeout=self.selector_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out waiting for {selector} on {url}")
            return ""
        except Exception as e:
            logger.warning(f"Failed to read {selector} on {url}: {e}")
            return ""
