# api/v1/endpoints/proxy.py
"""
``GET /proxy?url=...`` – fetch a page server‑side for browser clients that
cannot read it cross‑origin.

Success: 200 with the raw upstream body.
Failure: 400 ``{"error": ...}`` without ``url``; 500
``{"error": ..., "details": ...}`` when the upstream fetch fails or answers
with a non‑2xx status (``details`` then names that status).
"""

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import Counter

from core.config import settings

router = APIRouter()

PROXY_FETCHES = Counter(
    'proxy_fetches_total', 'Upstream fetches made by the proxy endpoint', ['outcome']
)


class UpstreamStatusError(Exception):
    """Upstream answered, but not with a 2xx."""


def get_upstream_client(request: Request) -> httpx.AsyncClient:
    """The shared client created in the app lifespan."""
    return request.app.state.http_client


@router.get("/proxy")
async def proxy(
    url: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    if not url:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": 'A "url" query parameter is required.'},
        )

    logger.info(f"Fetching URL: {url}")

    try:
        resp = await client.get(
            url,
            # Pretend to be a browser to avoid some simple bot blockers
            headers={"User-Agent": settings.DEFAULT_USER_AGENT},
            follow_redirects=True,
            timeout=settings.UPSTREAM_TIMEOUT,
        )
        if not resp.is_success:
            raise UpstreamStatusError(
                f"Failed to fetch: {resp.status_code} {resp.reason_phrase}"
            )
    except (httpx.HTTPError, httpx.InvalidURL, UpstreamStatusError) as exc:
        PROXY_FETCHES.labels(outcome="error").inc()
        logger.error(f"Error in proxy request for {url}: {exc!r}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to fetch the provided URL.",
                "details": str(exc) or exc.__class__.__name__,
            },
        )

    PROXY_FETCHES.labels(outcome="ok").inc()
    return Response(content=resp.text, media_type="text/html; charset=utf-8")
