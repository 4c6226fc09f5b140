"""API routes for kata challenge queries."""

from typing import Annotated

from litestar import Controller, get
from litestar.params import Parameter
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from api.schemas.challenge import ChallengeResponse, QueryResponse
from domain.models import QueryOptions
from services import create_challenge_service


class ChallengeController(Controller):
    """Controller for challenge query endpoints."""

    path = "/challenges"

    @get("/", status_code=HTTP_200_OK)
    async def query_challenges(
        self,
        sort_by: Annotated[str, Parameter(query="sort_by")] = "newest",
        language: Annotated[str, Parameter(query="language")] = "my-languages",
        status: Annotated[str, Parameter(query="status")] = "approved",
        progress: Annotated[str, Parameter(query="progress")] = "kata-incomplete",
        difficulty: Annotated[
            list[int] | None, Parameter(query="difficulty", description="Kyu levels, repeatable")
        ] = None,
        tags: Annotated[list[str] | None, Parameter(query="tags", description="Tag names, repeatable")] = None,
    ) -> QueryResponse:
        """
        Search katas and extract description, starting code and tests for each.

        Query parameters mirror the search filters; ``difficulty`` and ``tags``
        may be repeated. Challenges missing any artifact are omitted.
        """
        options = QueryOptions(
            sort_by=sort_by,
            language=language,
            status=status,
            progress=progress,
            difficulty=tuple(difficulty or ()),
            tags=tuple(tags or ()),
        )
        logger.debug(f"API request for challenges: {options}")

        service = create_challenge_service()
        try:
            result = await service.query(options)
        finally:
            await service.close()

        return QueryResponse(
            challenges=[
                ChallengeResponse(
                    name=name,
                    url=artifacts.url,
                    description=artifacts.description,
                    starting_code=artifacts.starting_code,
                    test_code=artifacts.test_code,
                )
                for name, artifacts in result.challenges.items()
            ],
            error=result.error,
        )
