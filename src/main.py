"""Main entry point for the findabuse DoH responder."""

import logging
import sys
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import Config
from src.services.abuse_client import AbuseContactClient
from src.services.doh_handler import router as doh_router
from src.services.logger import setup_logging
from src.services.response_assembler import ResponseAssembler
from src.services.reverse_resolver import ReverseNameResolver
from src.utils.http_client import HttpConnectionOptions, make_client


logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "findabuse-doh"


def get_version() -> str:
    """Installed package version, or a placeholder when running from source."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


async def not_found_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Unknown paths and methods all answer 404 with a fixed body."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found.", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


def create_app(
    config: Config,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    The upstream HTTP client lives for the lifetime of the application and
    is shared by all requests.

    Args:
        config: Validated configuration.
        transport: Optional HTTPX transport override for the upstream client.

    Returns:
        FastAPI: Configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = make_client(
            HttpConnectionOptions.with_timeout(config.upstream_timeout),
            transport=transport,
        )
        app.state.assembler = ResponseAssembler(
            resolver=ReverseNameResolver(config.reverse_zones),
            client=AbuseContactClient(client, upstream_host=config.upstream_host),
        )
        logger.info(f"Upstream abuse-contact API: {config.upstream_host}")
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        lifespan=lifespan,
        title="findabuse DoH responder",
        version=get_version(),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.include_router(doh_router)

    return app


def main() -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 for success, 1 for fatal error).
    """
    setup_logging()
    logger.info("Starting findabuse DoH responder")

    try:
        config = Config.from_env()
    except ValueError as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    setup_logging(verbose=config.verbose)
    uvicorn.run(
        create_app(config),
        host=config.listen_host,
        port=config.listen_port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
