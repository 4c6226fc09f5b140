"""Service running a kata query end to end."""

import asyncio
from typing import Callable, Optional

from loguru import logger

from application.orchestrator import BatchOrchestrator
from domain.exceptions import KataScraperError, NoChallengesFoundError
from domain.models import QueryOptions, ResultSet
from domain.parsers import ListingParser, URLBuilder
from infrastructure.parsers import ListingPageFetcher


class ChallengeService:
    """Builds the search URL, parses the listing and extracts each challenge."""

    def __init__(
        self,
        *,
        listing_fetcher: ListingPageFetcher,
        orchestrator_factory: Callable[[], BatchOrchestrator],
        listing_parser: type[ListingParser] = ListingParser,
        url_builder: type[URLBuilder] = URLBuilder,
    ):
        """
        Initialize service with dependencies.

        ``orchestrator_factory`` is called once per query, since the orchestrator
        closes its worker pool when the query finishes.
        """
        self.listing_fetcher = listing_fetcher
        self.orchestrator_factory = orchestrator_factory
        self.listing_parser = listing_parser
        self.url_builder = url_builder

    async def query(
        self,
        options: QueryOptions,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ResultSet:
        """
        Run a query and return complete challenges keyed by name.

        An empty listing is not raised: the returned ResultSet has ``error`` set
        and no challenges.

        Raises:
            ListingFetchError: If the listing page cannot be fetched
            ExtractionError: If no challenge page could be loaded
            QueryCancelledError: If ``cancel_event`` was set mid-query
        """
        logger.info(f"Running kata query: {options}")

        try:
            url = self.url_builder.build_search_url(options)
            listing = await self.listing_fetcher.fetch(url)

            try:
                challenges = self.listing_parser.parse(listing.normalized_text)
            except NoChallengesFoundError as e:
                logger.warning(f"Query returned no challenges: {e}")
                return ResultSet(error=str(e))

            logger.info(f"Found {len(challenges)} challenge(s) in listing")

            orchestrator = self.orchestrator_factory()
            return await orchestrator.run(challenges, options.language, cancel_event)

        except KataScraperError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error running kata query: {e}")
            raise KataScraperError(f"Failed to run kata query: {e}") from e

    async def close(self) -> None:
        """Release the HTTP client used for listing requests."""
        await self.listing_fetcher.close()
