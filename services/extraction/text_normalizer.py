# services/extraction/text_normalizer.py
"""
Turn a raw HTML (or plain text) blob into one clean line of prose.

Two steps, kept separate because the URL path runs content selection in
between them:

1. ``parse_document`` – lenient parse + removal of non‑content elements
   (scripts, styles, navigation, headers/footers, sidebars, stylesheet links).
2. ``collapse_whitespace`` – every whitespace run becomes a single space,
   leading/trailing whitespace is dropped.

``normalize`` chains both and reads the text of the whole document.
"""

import re
import warnings
from typing import Optional, Sequence

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag
from loguru import logger

from .config_loader import ExtractionProfile, get_extraction_profile

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def element_text(element: Tag) -> str:
    """Text of *element* with a space between adjacent nodes."""
    # A bare separator keeps "<li>Python</li><li>Go</li>" from fusing into "PythonGo"
    return element.get_text(separator=" ")


def strip_non_content(soup: BeautifulSoup, selectors: Sequence[str]) -> None:
    """Detach every element matching one of *selectors* (in place)."""
    for selector in selectors:
        for element in soup.select(selector):
            element.extract()


def parse_document(
    raw: str, profile: Optional[ExtractionProfile] = None
) -> BeautifulSoup:
    """
    Best‑effort parse of *raw*; never raises on malformed markup.

    Markup the parser rejects outright yields an empty document, which the
    caller sees as empty text.
    """
    profile = profile or get_extraction_profile()
    with warnings.catch_warnings():
        # Plain pasted text often "looks like" a URL or filename to bs4
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        try:
            soup = BeautifulSoup(raw or "", "html.parser")
        except ParserRejectedMarkup as exc:
            logger.warning(f"Markup rejected by parser, treating as empty: {exc}")
            return BeautifulSoup("", "html.parser")

    strip_non_content(soup, profile.strip_selectors)
    return soup


def normalize(raw: str, profile: Optional[ExtractionProfile] = None) -> str:
    """
    Strip non‑content markup from *raw* and return its text on one line.

    Returns ``""`` when nothing readable is left; deciding whether that is
    fatal is up to the caller.
    """
    soup = parse_document(raw, profile)
    return collapse_whitespace(element_text(soup))
