"""HTTP routes mapping endpoints to extraction operations."""

from typing import Any

from fastapi import APIRouter, Request

from serpscope import __version__
from serpscope.errors import ClientError

SERVICE_NAME = "serpscope"

ENDPOINTS = [
    "/search?q=query - Search the web and extract all data",
    "/images?q=query - Search images",
    "/videos?q=query - Search videos",
    "/news?q=query - Search news",
    "/health - Health check",
]

MISSING_QUERY_MESSAGE = "Missing query parameter 'q'"

router = APIRouter()


def _require_query(q: str | None) -> str:
    if not q:
        raise ClientError(MISSING_QUERY_MESSAGE)
    return q


@router.get("/")
@router.get("/health")
async def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": __version__,
        "endpoints": ENDPOINTS,
    }


@router.api_route("/search", methods=["GET", "POST"])
async def search(request: Request, q: str | None = None) -> dict[str, Any]:
    return await request.app.state.engine.search(_require_query(q))


@router.api_route("/images", methods=["GET", "POST"])
async def images(request: Request, q: str | None = None) -> dict[str, Any]:
    return await request.app.state.engine.images(_require_query(q))


@router.api_route("/videos", methods=["GET", "POST"])
async def videos(request: Request, q: str | None = None) -> dict[str, Any]:
    return await request.app.state.engine.videos(_require_query(q))


@router.api_route("/news", methods=["GET", "POST"])
async def news(request: Request, q: str | None = None) -> dict[str, Any]:
    return await request.app.state.engine.news(_require_query(q))
