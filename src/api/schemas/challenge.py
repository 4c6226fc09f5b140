"""Pydantic schemas for challenge query endpoints."""

from pydantic import BaseModel


class ChallengeResponse(BaseModel):
    """Extracted artifacts for a single challenge."""

    name: str
    url: str
    description: str
    starting_code: str
    test_code: str

    class Config:
        from_attributes = True


class QueryResponse(BaseModel):
    """Response containing every complete challenge found by a query."""

    challenges: list[ChallengeResponse]
    error: str | None = None  # Set when the listing had no challenges

    class Config:
        from_attributes = True
