"""Unit tests for batch orchestration and completeness filtering."""

import asyncio

import pytest

from application.orchestrator import BatchOrchestrator
from conftest import FakePage, FakeSessionFactory
from domain.exceptions import (
    BrowserLaunchError,
    BrowserUnavailableError,
    ExtractionError,
    QueryCancelledError,
)
from domain.models import ChallengeArtifacts, ChallengeRef
from infrastructure.extractors import ExtractionOutcome, ExtractionStage, ExtractionWorkerPool


class RecordingPool:
    """Pool double that records submissions and how many run at once."""

    def __init__(self, incomplete=(), unreachable=(), delay=0.01):
        self.incomplete = set(incomplete)
        self.unreachable = set(unreachable)
        self.delay = delay
        self.submitted: list[tuple[str, str]] = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self.closed = False

    async def submit(self, challenge, url):
        self.submitted.append((challenge.name, url))
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

        if challenge.name in self.unreachable:
            return ExtractionOutcome(
                name=challenge.name,
                artifacts=ChallengeArtifacts(url=url),
                stage=ExtractionStage.ABORTED,
            )

        artifacts = ChallengeArtifacts(
            url=url,
            description=f"Description of {challenge.name}",
            starting_code="def solve(): pass",
            test_code="" if challenge.name in self.incomplete else "test.assert_equals(1, 1)",
        )
        return ExtractionOutcome(name=challenge.name, artifacts=artifacts, stage=ExtractionStage.DONE)

    async def close(self):
        self.closed = True


def _challenges(count: int) -> list[ChallengeRef]:
    return [ChallengeRef(name=f"Kata {i}", path=f"/kata/{i}") for i in range(count)]


def test_partition_splits_into_fixed_size_batches():
    batches = list(BatchOrchestrator.partition(_challenges(12), 5))

    assert [len(batch) for batch in batches] == [5, 5, 2]


@pytest.mark.asyncio
async def test_run_issues_sequential_batches_with_bounded_concurrency():
    pool = RecordingPool()
    submitted_per_batch = []
    orchestrator = BatchOrchestrator(
        pool, batch_size=5, between_batches=lambda: submitted_per_batch.append(len(pool.submitted))
    )

    result = await orchestrator.run(_challenges(12), "python")

    assert submitted_per_batch == [5, 10, 12]
    assert pool.peak_in_flight == 5
    assert len(result) == 12
    assert pool.closed


@pytest.mark.asyncio
async def test_run_builds_training_urls_for_selected_language():
    pool = RecordingPool()
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    await orchestrator.run([ChallengeRef(name="Multiply", path="/kata/abc")], "c#")

    assert pool.submitted == [("Multiply", "https://www.codewars.com/kata/abc/train/csharp")]


@pytest.mark.asyncio
async def test_incomplete_challenges_are_dropped():
    pool = RecordingPool(incomplete={"Kata 1"})
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    result = await orchestrator.run(_challenges(3), "python")

    assert result.names() == ["Kata 0", "Kata 2"]
    assert result["Kata 0"].test_code == "test.assert_equals(1, 1)"
    assert result.ok


@pytest.mark.asyncio
async def test_later_results_overwrite_earlier_ones_with_same_name():
    pool = RecordingPool()
    orchestrator = BatchOrchestrator(pool, batch_size=1)
    challenges = [
        ChallengeRef(name="Twin", path="/kata/first"),
        ChallengeRef(name="Twin", path="/kata/second"),
    ]

    result = await orchestrator.run(challenges, "python")

    assert len(result) == 1
    assert result["Twin"].url == "https://www.codewars.com/kata/second/train/python"


@pytest.mark.asyncio
async def test_partial_navigation_failures_are_absorbed():
    pool = RecordingPool(unreachable={"Kata 0"})
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    result = await orchestrator.run(_challenges(2), "python")

    assert result.names() == ["Kata 1"]


@pytest.mark.asyncio
async def test_navigation_failure_for_every_challenge_raises():
    pool = RecordingPool(unreachable={"Kata 0", "Kata 1"})
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    with pytest.raises(ExtractionError):
        await orchestrator.run(_challenges(2), "python")

    assert pool.closed


@pytest.mark.asyncio
async def test_cancel_event_stops_before_next_batch_and_closes_pool():
    pool = RecordingPool()
    cancel = asyncio.Event()
    orchestrator = BatchOrchestrator(pool, batch_size=5, between_batches=cancel.set)

    with pytest.raises(QueryCancelledError) as exc_info:
        await orchestrator.run(_challenges(12), "python", cancel_event=cancel)

    assert exc_info.value.completed_batches == 1
    assert exc_info.value.total_batches == 3
    assert len(pool.submitted) == 5
    assert pool.closed


@pytest.mark.asyncio
async def test_task_cancellation_still_closes_pool():
    pool = RecordingPool(delay=10)
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    task = asyncio.create_task(orchestrator.run(_challenges(3), "python"))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert pool.closed


@pytest.mark.asyncio
async def test_failing_between_batches_hook_is_ignored():
    def hook():
        raise RuntimeError("gc unavailable")

    pool = RecordingPool()
    orchestrator = BatchOrchestrator(pool, batch_size=2, between_batches=hook)

    result = await orchestrator.run(_challenges(3), "python")

    assert len(result) == 3


@pytest.mark.asyncio
async def test_empty_challenge_list_returns_empty_result():
    pool = RecordingPool()
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    result = await orchestrator.run([], "python")

    assert len(result) == 0
    assert result.ok
    assert pool.closed


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        BatchOrchestrator(RecordingPool(), batch_size=0)


def _training_pages(challenges, **page_kwargs) -> dict[str, FakePage]:
    return {
        f"https://www.codewars.com{challenge.path}/train/python": FakePage(**page_kwargs)
        for challenge in challenges
    }


class FlakySessionFactory(FakeSessionFactory):
    """First session request fails; later ones succeed after a short delay."""

    def __init__(self, pages, error=BrowserUnavailableError("Target page crashed")):
        super().__init__(pages)
        self.error = error
        self.requests = 0

    async def new_session(self):
        self.requests += 1
        if self.requests == 1:
            raise self.error
        await asyncio.sleep(0.05)
        return await super().new_session()


class UnlaunchableSessionFactory(FakeSessionFactory):
    async def new_session(self):
        raise BrowserLaunchError("Executable doesn't exist at /ms-playwright/chromium")


@pytest.mark.asyncio
async def test_session_failure_aborts_only_that_challenge_and_leaks_nothing():
    challenges = _challenges(3)
    factory = FlakySessionFactory(_training_pages(challenges))
    pool = ExtractionWorkerPool(factory, concurrency=5, selector_timeout=0.05)
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    result = await orchestrator.run(challenges, "python")

    assert len(result) == 2
    assert factory.closed
    assert pool.closed
    assert pool.session_count == 0
    assert len(factory.sessions) == 2
    assert all(session.closed for session in factory.sessions)

    navigations_at_close = len(factory.navigations)
    await asyncio.sleep(0.1)
    assert len(factory.navigations) == navigations_at_close


@pytest.mark.asyncio
async def test_browser_launch_failure_is_raised_after_pool_closes():
    challenges = _challenges(3)
    factory = UnlaunchableSessionFactory(_training_pages(challenges))
    pool = ExtractionWorkerPool(factory, concurrency=5, selector_timeout=0.05)
    orchestrator = BatchOrchestrator(pool, batch_size=5)

    with pytest.raises(BrowserLaunchError):
        await orchestrator.run(challenges, "python")

    assert pool.closed
    assert factory.closed
    assert factory.sessions == []


@pytest.mark.asyncio
async def test_real_pool_bounds_concurrency_inside_each_batch():
    challenges = _challenges(12)
    factory = FakeSessionFactory(_training_pages(challenges, navigation_delay=0.02))
    pool = ExtractionWorkerPool(factory, concurrency=3, selector_timeout=0.05)
    navigations_per_batch = []
    orchestrator = BatchOrchestrator(
        pool,
        batch_size=5,
        between_batches=lambda: navigations_per_batch.append(len(factory.navigations)),
    )

    result = await orchestrator.run(challenges, "python")

    assert navigations_per_batch == [5, 10, 12]
    assert factory.peak_active == 3
    assert pool.peak_in_flight == 3
    assert len(factory.sessions) <= 3
    assert len(result) == 12
    assert factory.closed
