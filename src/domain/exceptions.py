"""Exceptions raised by the kata scraping pipeline."""


class KataScraperError(Exception):
    """Base error for the kata scraper."""

    pass


class ListingFetchError(KataScraperError):
    """The kata search page could not be fetched."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch listing {url}: {reason}")


class ParsingError(KataScraperError, ValueError):
    """Error parsing listing or page content."""

    pass


class NoChallengesFoundError(ParsingError):
    """The listing page contained no usable challenge entries."""

    def __init__(self, message: str = "No challenges found with the given query options."):
        super().__init__(message)


class ExtractionError(KataScraperError):
    """Challenge pages could not be extracted at all."""

    pass


class BrowserUnavailableError(ExtractionError):
    """The page-automation engine could not provide a page session."""

    pass


class BrowserLaunchError(BrowserUnavailableError):
    """The browser itself could not be started; no challenge can be extracted."""

    pass


class QueryCancelledError(KataScraperError):
    """The query was aborted by its caller before all batches ran."""

    def __init__(self, completed_batches: int, total_batches: int):
        self.completed_batches = completed_batches
        self.total_batches = total_batches
        super().__init__(
            f"Query cancelled after {completed_batches} of {total_batches} batch(es)"
        )
