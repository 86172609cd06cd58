# services/extraction/proxy_client.py
"""
Client for the HTML fetch proxy (``GET /proxy?url=...``).

One attempt per call, no retries.  Failures are classified as:

* ``TransportError`` – no HTTP response at all (connection refused, DNS,
  timeout, broken read …).
* ``HttpError`` – any non‑2xx answer.  The detail comes from the proxy's
  JSON error body (``details`` then ``error``) and falls back to the HTTP
  reason phrase when the body is not JSON.
"""

from typing import Optional

import httpx
from loguru import logger

from core.exceptions import HttpError, TransportError


class ProxyClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 25.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Borrowed client – the owner (pipeline / app lifespan) closes it
        self._client = client

    async def fetch(self, url: str) -> str:
        """Return the raw body of *url* as fetched by the proxy."""
        proxy_url = f"{self.base_url}/proxy"
        logger.info(f"Fetching from URL via proxy: {proxy_url}?url={url}")

        try:
            if self._client is not None:
                resp = await self._client.get(
                    proxy_url, params={"url": url}, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(
                        proxy_url, params={"url": url}, timeout=self.timeout
                    )
        except httpx.TimeoutException as exc:
            logger.error(f"Proxy request for {url} timed out: {exc!r}")
            raise TransportError(f"Timed out after {self.timeout}s") from exc
        except httpx.RequestError as exc:
            logger.error(f"Proxy request for {url} failed: {exc!r}")
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            detail = _error_detail(resp)
            logger.error(f"Proxy returned {resp.status_code} for {url}: {detail}")
            raise HttpError(resp.status_code, detail)

        return resp.text


def _error_detail(resp: httpx.Response) -> str:
    """Best description of a failed proxy response."""
    try:
        body = resp.json()
    except ValueError:
        # Response might not be JSON
        return resp.reason_phrase
    if isinstance(body, dict):
        for key in ("details", "error"):
            if body.get(key):
                return str(body[key])
    return resp.reason_phrase
