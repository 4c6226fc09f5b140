"""Value objects for the fetched listing page."""

from dataclasses import dataclass


@dataclass
class ListingResult:
    """Response of the kata search page."""

    status_code: int
    raw_body: str
    normalized_text: str
