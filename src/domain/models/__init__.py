"""Domain models package."""

from .challenge import ChallengeArtifacts, ChallengeRef, ResultSet
from .listing import ListingResult
from .query import ProgressOption, QueryOptions, SortOption, StatusOption

__all__ = [
    "ChallengeArtifacts",
    "ChallengeRef",
    "ListingResult",
    "ProgressOption",
    "QueryOptions",
    "ResultSet",
    "SortOption",
    "StatusOption",
]
