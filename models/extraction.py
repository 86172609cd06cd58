# models/extraction.py
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.exceptions import NoInputError


# ----------------------------------------------------------------------
#  Resolved sources – exactly one of these reaches the pipeline
# ----------------------------------------------------------------------
class UrlSource(BaseModel):
    kind: Literal["url"] = "url"
    url: str


class TextSource(BaseModel):
    kind: Literal["text"] = "text"
    text: str


Source = Union[UrlSource, TextSource]


# ----------------------------------------------------------------------
#  What the caller hands in (form fields, API body, CLI flags)
# ----------------------------------------------------------------------
class ExtractionInput(BaseModel):
    """
    Raw user input for one extraction run.

    Both fields may be filled in; :meth:`resolve_source` decides which one
    is used.  A non‑blank URL always wins, pasted text is only consulted
    when the URL is blank.
    """

    url: Optional[str] = Field(default="", description="Job posting URL")
    pasted_text: Optional[str] = Field(
        default="", description="Job description pasted by the user"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "url": "https://boards.example.com/acme/jobs/42",
                "pastedText": "",
            }
        },
    )

    def resolve_source(self) -> Source:
        url = (self.url or "").strip()
        if url:
            return UrlSource(url=url)
        text = (self.pasted_text or "").strip()
        if text:
            return TextSource(text=text)
        raise NoInputError()


# ----------------------------------------------------------------------
#  Shape returned by the structured extraction call
# ----------------------------------------------------------------------
class ExtractedFields(BaseModel):
    """
    ``companyName`` and ``role`` are required by the response schema, so
    they must be present (an empty string is fine).  ``location`` and
    ``summary`` may be missing or null.
    """

    company_name: str
    role: str
    location: Optional[str] = None
    summary: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )
