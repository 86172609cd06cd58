# tests/conftest.py
"""
Shared fakes for the two network collaborators.

``FakeUpstreams`` answers both the fetch proxy (host ``proxy.test``) and the
Gemini API (host ``gemini.test``) through one ``httpx.MockTransport`` and
records every request, so tests can assert which calls were (not) made.
"""

import json
from typing import Callable, List, Optional

import httpx
import pytest

from services.extraction.pipeline import ExtractionPipeline, PipelineConfig

PROXY_BASE = "http://proxy.test"
GEMINI_ENDPOINT = "http://gemini.test/v1beta"

_PROMPT_MARKER = 'Job Posting Content: """'


def gemini_envelope(text: str) -> dict:
    """A successful ``generateContent`` body whose first part is *text*."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def fields_json(
    company="Acme Corp",
    role="Senior Engineer",
    location="Remote",
    summary="Build distributed systems.",
) -> str:
    return json.dumps(
        {"companyName": company, "role": role, "location": location, "summary": summary}
    )


class FakeUpstreams:
    def __init__(
        self,
        page: str = "",
        page_status: int = 200,
        page_json: Optional[dict] = None,
        extraction_text: Optional[str] = None,
        proxy_exc: Optional[Callable[[httpx.Request], Exception]] = None,
    ):
        self.page = page
        self.page_status = page_status
        self.page_json = page_json
        self.extraction_text = extraction_text if extraction_text is not None else fields_json()
        self.proxy_exc = proxy_exc
        self.proxy_requests: List[httpx.Request] = []
        self.gemini_requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "proxy.test":
            self.proxy_requests.append(request)
            if self.proxy_exc is not None:
                raise self.proxy_exc(request)
            if self.page_json is not None:
                return httpx.Response(self.page_status, json=self.page_json)
            return httpx.Response(self.page_status, text=self.page)

        self.gemini_requests.append(request)
        return httpx.Response(200, json=gemini_envelope(self.extraction_text))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def requested_urls(self) -> List[str]:
        return [r.url.params["url"] for r in self.proxy_requests]

    def submitted_text(self, index: int = 0) -> str:
        """The posting text embedded in the *index*‑th extraction prompt."""
        body = json.loads(self.gemini_requests[index].content)
        prompt = body["contents"][0]["parts"][0]["text"]
        return prompt.split(_PROMPT_MARKER, 1)[1][: -len('"""')]


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        proxy_base_url=PROXY_BASE,
        gemini_api_key="test-key",
        gemini_endpoint=GEMINI_ENDPOINT,
    )


@pytest.fixture
def make_pipeline(pipeline_config):
    """Build a pipeline wired to a ``FakeUpstreams``."""

    def _make(upstreams: FakeUpstreams, config: Optional[PipelineConfig] = None):
        return ExtractionPipeline(config or pipeline_config, client=upstreams.client())

    return _make
