from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging
import sys

import httpx

from saavn_relay.config import Settings
from saavn_relay.api import routes
from saavn_relay.models.lookup_model import NOT_FOUND_MESSAGE, ErrorResponse
from saavn_relay.services.saavn import SaavnService


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and methods other than GET on / share one answer
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=ErrorResponse(error=NOT_FOUND_MESSAGE).model_dump())
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())


def create_app(app_settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Build the relay application from explicit settings.

    ``transport`` replaces the network layer of the outbound HTTP client,
    which lets tests answer upstream calls locally.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown events
        """
        client = httpx.AsyncClient(timeout=app_settings.UPSTREAM_TIMEOUT, transport=transport)
        app.state.saavn_service = SaavnService(
            client=client,
            search_url=app_settings.SEARCH_API_URL,
            detail_url=app_settings.DETAIL_API_URL,
        )
        base_url = f"http://localhost:{app_settings.PORT}"
        logger.info("=" * 60)
        logger.info(f"Saavn relay running on {base_url}")
        logger.info(f"Try: {base_url}/?query=faded")
        logger.info(f"Try: {base_url}/?query=dil%20diyan%20gallan")
        logger.info("=" * 60)

        try:
            yield
        finally:
            app.state.saavn_service = None
            await client.aclose()

    app = FastAPI(
        title="Saavn Relay",
        description="Looks up JioSaavn download URLs for a song name",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.include_router(routes.router)

    return app


def run() -> None:
    import uvicorn

    from saavn_relay.config import settings

    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
