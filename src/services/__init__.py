import gc
from typing import Optional

from infrastructure.config import Settings, get_settings
from services.challenge import ChallengeService


def create_challenge_service(settings: Optional[Settings] = None) -> ChallengeService:
    """Factory function to create challenge service with all dependencies."""
    from application.orchestrator import BatchOrchestrator
    from infrastructure.browser import PlaywrightSessionFactory
    from infrastructure.extractors import ExtractionWorkerPool
    from infrastructure.http_client import AsyncHTTPClient
    from infrastructure.parsers import ListingPageFetcher

    settings = settings or get_settings()

    http_client = AsyncHTTPClient(timeout=settings.request_timeout)
    listing_fetcher = ListingPageFetcher(http_client, user_agent=settings.user_agent)

    def create_orchestrator() -> BatchOrchestrator:
        session_factory = PlaywrightSessionFactory(
            headless=settings.headless,
            user_agent=settings.user_agent,
            page_timeout=settings.page_timeout,
        )
        pool = ExtractionWorkerPool(
            session_factory,
            concurrency=settings.concurrency,
            navigation_timeout=settings.navigation_timeout,
            selector_timeout=settings.selector_timeout,
        )
        return BatchOrchestrator(
            pool,
            batch_size=settings.batch_size,
            between_batches=gc.collect if settings.collect_between_batches else None,
        )

    return ChallengeService(
        listing_fetcher=listing_fetcher,
        orchestrator_factory=create_orchestrator,
    )


__all__ = ["ChallengeService", "create_challenge_service"]
