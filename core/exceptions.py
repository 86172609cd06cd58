# core/exceptions.py
"""
Error taxonomy for the extraction pipeline and the HTTP service.

Every error carries a human‑readable ``message`` plus the originating
``detail`` (upstream status line, parse error text, …) and knows how to
render itself as the JSON envelope returned by the API:

    {"error": {"code": ..., "message": ..., "detail": ..., "status": ...}}
"""

from typing import Any, Dict, List, Optional


class JobExtractorException(Exception):
    """Base class for every error raised by this project."""

    code = "EXTRACTOR_ERROR"
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "detail": self.detail,
                "status": self.status_code,
            }
        }


class ValidationError(JobExtractorException):
    """Request payload rejected by FastAPI / pydantic."""

    code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("Request validation failed", detail=str(errors))
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["error"]["errors"] = self.errors
        return payload


# ----------------------------------------------------------------------
# Proxy client failures
# ----------------------------------------------------------------------
class ProxyError(JobExtractorException):
    """The fetch proxy could not deliver the page body."""

    code = "PROXY_ERROR"
    status_code = 502


class TransportError(ProxyError):
    """Network/connection failure (or timeout) before any HTTP response."""

    code = "PROXY_TRANSPORT_ERROR"

    def __init__(self, detail: str):
        super().__init__("Could not reach the fetch proxy", detail=detail)


class HttpError(ProxyError):
    """The proxy answered with a non‑success HTTP status."""

    code = "PROXY_HTTP_ERROR"

    def __init__(self, status: int, detail: str):
        super().__init__(
            f"Failed to fetch URL via proxy (Status: {status})", detail=detail
        )
        self.status = status


# ----------------------------------------------------------------------
# Structured extraction failures
# ----------------------------------------------------------------------
class ExtractionError(JobExtractorException):
    """The structured extraction call did not yield usable fields."""

    code = "EXTRACTION_ERROR"
    status_code = 502


class RequestError(ExtractionError):
    """The extraction call itself failed (network, timeout, HTTP status)."""

    code = "EXTRACTION_REQUEST_ERROR"

    def __init__(self, detail: str, status: Optional[int] = None):
        message = "AI API request failed"
        if status is not None:
            message = f"{message} (Status: {status})"
        super().__init__(message, detail=detail)
        self.status = status


class MalformedResponseError(ExtractionError):
    """The call succeeded but the response envelope is not the expected one."""

    code = "EXTRACTION_MALFORMED_RESPONSE"

    def __init__(self, detail: str):
        super().__init__(
            "Could not extract details: AI response format was unexpected",
            detail=detail,
        )


class InvalidJsonError(ExtractionError):
    """The embedded extraction text is not valid JSON matching the schema."""

    code = "EXTRACTION_INVALID_JSON"

    def __init__(self, detail: str, raw: Optional[str] = None):
        super().__init__(
            "AI returned invalid JSON. Please try again or check the "
            "extracted text if it was from a URL",
            detail=detail,
        )
        self.raw = raw


# ----------------------------------------------------------------------
# Pipeline‑level failures (what callers of ExtractionPipeline.run see)
# ----------------------------------------------------------------------
class PipelineError(JobExtractorException):
    """Terminal failure of one pipeline run."""

    code = "PIPELINE_ERROR"
    cause: Optional[JobExtractorException] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.cause is not None:
            payload["error"]["cause"] = self.cause.code
        return payload


class NoInputError(PipelineError):
    code = "NO_INPUT"
    status_code = 400

    def __init__(self):
        super().__init__(
            "Please provide a Job Posting URL or paste the Job Description text"
        )


class SourceFetchFailed(PipelineError):
    """Wraps a :class:`ProxyError`; the run stops without trying pasted text."""

    code = "SOURCE_FETCH_FAILED"
    status_code = 502

    def __init__(self, cause: ProxyError):
        super().__init__(
            f"Error processing URL: {cause.message}. "
            "Try pasting text or check the URL/proxy",
            detail=cause.detail,
        )
        self.cause = cause


class EmptyContentError(PipelineError):
    code = "EMPTY_CONTENT"
    status_code = 422

    def __init__(self, url: str):
        super().__init__(
            "Could not extract meaningful text content from the URL after "
            "parsing. Try pasting text instead",
            detail=url,
        )


class ExtractionFailed(PipelineError):
    """Wraps an :class:`ExtractionError`."""

    code = "EXTRACTION_FAILED"
    status_code = 502

    def __init__(self, cause: ExtractionError):
        super().__init__(f"AI Extraction Error: {cause.message}", detail=cause.detail)
        self.cause = cause
