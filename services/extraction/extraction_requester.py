# services/extraction/extraction_requester.py
"""
Structured extraction of job fields through Gemini ``generateContent``.

The request carries an instruction prompt with the posting text embedded
verbatim, plus a response schema so the model answers with a JSON object:

    {"companyName": str, "role": str, "location": str | null, "summary": str}

Failure classes (all raised, never returned):

* ``RequestError`` – network failure/timeout or a non‑2xx status.
* ``MalformedResponseError`` – 2xx, but no ``candidates[0].content.parts[0].text``.
* ``InvalidJsonError`` – that text is not a JSON object matching the schema.

The *content* of the fields is not interpreted here.
"""

import json
from typing import Any, Dict, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from core.exceptions import InvalidJsonError, MalformedResponseError, RequestError
from models.extraction import ExtractedFields

PROMPT_TEMPLATE = """\
From the following job posting content, extract these details: company name, \
job title/role, primary location (city, state if available, or "Remote"), and a \
concise 2-3 sentence summary of key responsibilities or technologies.
Provide the output as a valid JSON object with keys: "companyName", "role", \
"location", and "summary".
If a detail is not found, use an empty string "" or null for its value.
Job Posting Content: \"\"\"{text}\"\"\""""

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "companyName": {"type": "STRING", "description": "The name of the company."},
        "role": {"type": "STRING", "description": "The job title or role."},
        "location": {
            "type": "STRING",
            "nullable": True,
            "description": "The primary location of the job (e.g., City, ST or Remote).",
        },
        "summary": {
            "type": "STRING",
            "description": "A brief summary of the job (2-3 sentences).",
        },
    },
    # location and summary may be missing from the posting
    "required": ["companyName", "role"],
}


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


def build_payload(text: str) -> Dict[str, Any]:
    """The full ``generateContent`` request body for *text*."""
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(text)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


class ExtractionRequester:
    """
    Sends one extraction request per call.

    Parameters
    ----------
    api_key: str
        Gemini API key, sent as ``x-goog-api-key``.
    model: str
        Model name, e.g. ``gemini-2.0-flash``.
    endpoint: str
        API root, e.g. ``https://generativelanguage.googleapis.com/v1beta``.
    timeout: float
        Seconds before the call is abandoned (surfaced as ``RequestError``).
    client: httpx.AsyncClient, optional
        Shared client; when omitted a short‑lived one is opened per call.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        endpoint: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.endpoint}/models/{self.model}:generateContent"

    async def request_extraction(self, text: str) -> ExtractedFields:
        resp = await self._post(build_payload(text))

        if not resp.is_success:
            detail = _api_error_message(resp)
            logger.error(f"Gemini API error {resp.status_code}: {detail}")
            raise RequestError(detail, status=resp.status_code)

        raw = _candidate_text(resp)
        return _parse_fields(raw)

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        try:
            if self._client is not None:
                return await self._client.post(
                    self.url, json=payload, headers=headers, timeout=self.timeout
                )
            async with httpx.AsyncClient() as client:
                return await client.post(
                    self.url, json=payload, headers=headers, timeout=self.timeout
                )
        except httpx.TimeoutException as exc:
            logger.error(f"Gemini API request timed out: {exc!r}")
            raise RequestError(f"Timed out after {self.timeout}s") from exc
        except httpx.RequestError as exc:
            logger.error(f"Gemini API request failed: {exc!r}")
            raise RequestError(str(exc) or exc.__class__.__name__) from exc


# ----------------------------------------------------------------------
# Response helpers
# ----------------------------------------------------------------------
def _api_error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.reason_phrase


def _candidate_text(resp: httpx.Response) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of the envelope."""
    try:
        body = resp.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Response body is not JSON: {exc}") from exc

    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        logger.error(f"Unexpected response structure from Gemini API: {body!r}")
        raise MalformedResponseError(
            f"Missing candidates[0].content.parts[0].text ({exc!r})"
        ) from exc

    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError("Candidate text is empty")
    return text


def _parse_fields(raw: str) -> ExtractedFields:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error(f"Error parsing JSON from AI: {exc}. Raw string: {raw!r}")
        raise InvalidJsonError(str(exc), raw=raw) from exc

    if not isinstance(data, dict):
        raise InvalidJsonError(
            f"Expected a JSON object, got {type(data).__name__}", raw=raw
        )

    try:
        return ExtractedFields.model_validate(data)
    except ValidationError as exc:
        logger.error(f"AI JSON does not match the extraction schema: {exc}")
        raise InvalidJsonError(
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            ),
            raw=raw,
        ) from exc
