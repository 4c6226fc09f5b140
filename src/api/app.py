"""Litestar application factory."""

from litestar import Litestar, Request, Response
from litestar.status_codes import HTTP_400_BAD_REQUEST, HTTP_502_BAD_GATEWAY
from loguru import logger

from api.routes import ChallengeController
from domain.exceptions import KataScraperError
from infrastructure.config import get_settings
from infrastructure.log_config import setup_logger


def scraper_error_handler(request: Request, exc: KataScraperError) -> Response:
    logger.error(f"Request {request.url.path} failed: {exc}")
    return Response(content={"detail": str(exc)}, status_code=HTTP_502_BAD_GATEWAY)


def invalid_query_handler(request: Request, exc: ValueError) -> Response:
    return Response(content={"detail": str(exc)}, status_code=HTTP_400_BAD_REQUEST)


def configure_logging() -> None:
    setup_logger(get_settings())


def create_app() -> Litestar:
    return Litestar(
        route_handlers=[ChallengeController],
        exception_handlers={
            KataScraperError: scraper_error_handler,
            ValueError: invalid_query_handler,
        },
        on_startup=[configure_logging],
    )


app = create_app()
