# services/extraction/pipeline.py
"""
URL or pasted text → draft job record.

    ExtractionInput
        │ resolve_source()            (URL wins, both blank → NoInputError)
        ├── UrlSource  → ProxyClient.fetch → extract_page_text
        └── TextSource → trimmed text as‑is
        ▼
    truncate(max_chars) → ExtractionRequester → map_to_draft → JobDraftRecord

A run is single‑pass: nothing is retried and nothing is persisted, so a
failed run is simply started again by the caller.  Cancelling the task that
awaits ``run`` cancels whichever network call is in flight.
"""

import asyncio
import time
from typing import Optional

import httpx
from loguru import logger
from prometheus_client import Counter, Histogram
from pydantic import BaseModel, Field

from core.config import Settings
from core.exceptions import (
    EmptyContentError,
    ExtractionError,
    ExtractionFailed,
    PipelineError,
    ProxyError,
    SourceFetchFailed,
)
from models.extraction import ExtractionInput, UrlSource
from models.job_draft import JobDraftRecord

from .config_loader import ExtractionProfile, get_extraction_profile
from .content_selector import extract_page_text
from .extraction_requester import ExtractionRequester
from .proxy_client import ProxyClient
from .result_mapper import map_to_draft

DEFAULT_MAX_CHARS = 28_000

EXTRACTION_RUNS = Counter(
    'extraction_runs_total', 'Extraction runs by resolved source kind', ['source']
)
EXTRACTION_FAILURES = Counter(
    'extraction_failures_total', 'Failed extraction runs by error code', ['code']
)
EXTRACTION_DURATION = Histogram(
    'extraction_duration_seconds', 'Wall time of one extraction run'
)


class PipelineConfig(BaseModel):
    """Everything a pipeline needs, passed in explicitly."""

    proxy_base_url: str = "http://localhost:3001"
    proxy_timeout: float = Field(default=25.0, gt=0)

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    extraction_timeout: float = Field(default=30.0, gt=0)

    # Bounds cost/latency of the extraction call; the text is cut from the start
    max_chars: int = Field(default=DEFAULT_MAX_CHARS, ge=1)
    profile: ExtractionProfile = Field(
        default_factory=lambda: get_extraction_profile("default")
    )

    @classmethod
    def from_settings(
        cls, settings: Settings, profile_name: Optional[str] = None
    ) -> "PipelineConfig":
        return cls(
            proxy_base_url=settings.PROXY_BASE_URL,
            proxy_timeout=settings.PROXY_TIMEOUT,
            gemini_api_key=settings.GEMINI_API_KEY,
            gemini_model=settings.GEMINI_MODEL,
            gemini_endpoint=settings.GEMINI_ENDPOINT,
            extraction_timeout=settings.EXTRACTION_TIMEOUT,
            max_chars=settings.MAX_TEXT_CHARS,
            profile=get_extraction_profile(profile_name or settings.EXTRACTION_PROFILE),
        )


def truncate(text: str, max_chars: int) -> str:
    """First *max_chars* characters of *text*; no ellipsis, no word boundary."""
    if len(text) <= max_chars:
        return text
    logger.warning(
        f"Text to process is very long ({len(text)} chars), "
        f"truncating to {max_chars} characters"
    )
    return text[:max_chars]


class ExtractionPipeline:
    """
    Sequences proxy fetch, normalization, structured extraction and mapping.

    Collaborators can be injected (tests, custom transports); otherwise they
    are built from *config* around one shared ``httpx.AsyncClient`` that the
    pipeline owns and closes in :meth:`cleanup`.
    """

    def __init__(
        self,
        config: PipelineConfig,
        client: Optional[httpx.AsyncClient] = None,
        proxy_client: Optional[ProxyClient] = None,
        requester: Optional[ExtractionRequester] = None,
    ):
        self.config = config
        self._owns_client = client is None and (proxy_client is None or requester is None)
        self.client = client
        if self._owns_client:
            self.client = httpx.AsyncClient()

        self.proxy_client = proxy_client or ProxyClient(
            config.proxy_base_url, timeout=config.proxy_timeout, client=self.client
        )
        self.requester = requester or ExtractionRequester(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            endpoint=config.gemini_endpoint,
            timeout=config.extraction_timeout,
            client=self.client,
        )

    async def __aenter__(self) -> "ExtractionPipeline":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    # ------------------------------------------------------------------
    async def run(self, source: ExtractionInput) -> JobDraftRecord:
        """
        Produce one draft record or raise one ``PipelineError``:
        ``NoInputError``, ``SourceFetchFailed``, ``EmptyContentError`` or
        ``ExtractionFailed``.
        """
        start = time.perf_counter()
        try:
            resolved = source.resolve_source()
            EXTRACTION_RUNS.labels(source=resolved.kind).inc()

            if isinstance(resolved, UrlSource):
                text = await self._text_from_url(resolved.url)
                link = resolved.url
            else:
                text = resolved.text
                link = ""

            text = truncate(text, self.config.max_chars)

            try:
                fields = await self.requester.request_extraction(text)
            except ExtractionError as exc:
                raise ExtractionFailed(exc) from exc

            draft = map_to_draft(fields, link)
        except PipelineError as exc:
            EXTRACTION_FAILURES.labels(code=exc.code).inc()
            logger.error(f"Extraction run failed [{exc.code}]: {exc}")
            raise
        finally:
            EXTRACTION_DURATION.observe(time.perf_counter() - start)

        logger.info(
            f"Extracted draft: {draft.company_name!r} / {draft.role!r} "
            f"({'url' if link else 'text'} source)"
        )
        return draft

    async def _text_from_url(self, url: str) -> str:
        try:
            body = await self.proxy_client.fetch(url)
        except ProxyError as exc:
            # No fallback to pasted text – the caller asked for this URL
            raise SourceFetchFailed(exc) from exc

        # Parsing large pages is CPU bound – keep it off the event loop
        text = await asyncio.get_running_loop().run_in_executor(
            None, extract_page_text, body, self.config.profile
        )
        if not text:
            raise EmptyContentError(url)
        return text

    # ------------------------------------------------------------------
    async def cleanup(self) -> None:
        if self._owns_client and self.client is not None:
            await self.client.aclose()
