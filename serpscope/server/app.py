"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from serpscope import __version__
from serpscope.config.schema import Config
from serpscope.engine.browser import BrowserSession
from serpscope.engine.extractor import SearchEngine
from serpscope.engine.models import error_envelope
from serpscope.errors import NotFoundError, ScraperError
from serpscope.server.routes import router

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

NOT_FOUND_MESSAGE = "Endpoint not found"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(error_envelope(message), status_code=status_code, headers=CORS_HEADERS)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("serpscope {} ready", __version__)
    try:
        yield
    finally:
        session: BrowserSession | None = app.state.session
        if session is not None:
            await session.close()


def create_app(config: Config | None = None, engine: Any | None = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        config: Service configuration. Defaults are used when omitted.
        engine: Object exposing ``search``/``images``/``videos``/``news``
            coroutines. A :class:`SearchEngine` over a new
            :class:`BrowserSession` is created when omitted, and that session
            is closed on shutdown.
    """
    config = config or Config()

    app = FastAPI(
        title="serpscope",
        description="Search results page extraction over a headless browser",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    session: BrowserSession | None = None
    if engine is None:
        session = BrowserSession(config.browser)
        engine = SearchEngine(
            session,
            browser_config=config.browser,
            search_config=config.search,
            limits=config.limits,
        )
    app.state.config = config
    app.state.engine = engine
    app.state.session = session

    @app.middleware("http")
    async def cors_headers(request: Request, call_next: Any) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(ScraperError)
    async def scraper_error_handler(request: Request, exc: ScraperError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("{} {} failed: {}", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # unknown paths and unsupported methods on known paths
        if exc.status_code in (404, 405):
            return await scraper_error_handler(request, NotFoundError(NOT_FOUND_MESSAGE))
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on {} {}", request.method, request.url.path)
        return error_response(500, str(exc) or type(exc).__name__)

    app.include_router(router)
    return app
