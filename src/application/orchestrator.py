"""Async orchestrator driving challenge extraction batch by batch."""

import asyncio
from typing import Callable, Iterator, Optional, Protocol, Sequence

from loguru import logger

from domain.exceptions import ExtractionError, QueryCancelledError
from domain.models import ChallengeRef, ResultSet
from domain.parsers.url_builder import URLBuilder
from infrastructure.extractors import ExtractionOutcome


class ExtractionPoolProtocol(Protocol):
    async def submit(self, challenge: ChallengeRef, url: str) -> ExtractionOutcome:
        ...

    async def close(self) -> None:
        ...


class BatchOrchestrator:
    """Runs extractions in fixed-size, strictly sequential batches."""

    def __init__(
        self,
        pool: ExtractionPoolProtocol,
        batch_size: int = 5,
        between_batches: Optional[Callable[[], object]] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            pool: Extraction worker pool; closed when ``run`` finishes
            batch_size: Number of challenges extracted concurrently
            between_batches: Hook called after each batch, e.g. ``gc.collect``
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.pool = pool
        self.batch_size = batch_size
        self.between_batches = between_batches

    @staticmethod
    def partition(
        challenges: Sequence[ChallengeRef], batch_size: int
    ) -> Iterator[list[ChallengeRef]]:
        for start in range(0, len(challenges), batch_size):
            yield list(challenges[start : start + batch_size])

    async def run(
        self,
        challenges: Sequence[ChallengeRef],
        language: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ResultSet:
        """
        Extract every challenge and return only the complete ones.

        Challenges missing any artifact are dropped from the result.

        Raises:
            QueryCancelledError: If ``cancel_event`` is set before a batch starts
            ExtractionError: If navigation failed for every challenge
        """
        batches = list(self.partition(challenges, self.batch_size))
        results = ResultSet()
        navigation_failures = 0

        logger.info(
            f"Extracting {len(challenges)} challenge(s) in {len(batches)} batch(es) of up to {self.batch_size}"
        )

        try:
            for index, batch in enumerate(batches):
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(f"Query cancelled before batch {index + 1}/{len(batches)}")
                    raise QueryCancelledError(index, len(batches))

                logger.debug(f"Batch {index + 1}/{len(batches)}: {[c.name for c in batch]}")
                # Every unit settles before an error propagates and the pool closes
                settled = await asyncio.gather(
                    *(
                        self.pool.submit(challenge, URLBuilder.build_training_url(challenge, language))
                        for challenge in batch
                    ),
                    return_exceptions=True,
                )
                outcomes = self._raise_first_error(settled)

                for outcome in outcomes:
                    if outcome.aborted:
                        navigation_failures += 1
                    results.add(outcome.name, outcome.artifacts)

                self._after_batch()
        finally:
            await self.pool.close()

        if challenges and navigation_failures == len(challenges):
            logger.error("Navigation failed for every challenge")
            raise ExtractionError(
                f"Failed to load any of {len(challenges)} challenge page(s)"
            )

        complete = results.completed()
        dropped = len(results) - len(complete)
        if dropped:
            logger.info(f"Dropped {dropped} incomplete challenge(s)")

        logger.info(f"Extracted {len(complete)} complete challenge(s)")
        return complete

    @staticmethod
    def _raise_first_error(settled: list) -> list[ExtractionOutcome]:
        for item in settled:
            if isinstance(item, BaseException):
                logger.error(f"Extraction unit failed: {item!r}")
                raise item
        return settled

    def _after_batch(self) -> None:
        if self.between_batches is None:
            return
        try:
            self.between_batches()
        except Exception as e:
            logger.warning(f"Between-batch hook failed: {e}")
